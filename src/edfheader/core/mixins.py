import inspect
import pprint


class ViewInstance:
    """Mixin endowing inheritors with echo and print str representations.

    The echo representation binds each __init__ parameter to the instance
    attribute of the same name so that it reads like the call that built
    the instance.
    """

    __slots__ = ()

    def _fetch_attributes(self):
        """Returns a dict of all non-protected attrs."""

        return {attr: val for attr, val in vars(self).items()
                if not attr.startswith('_')}

    def __repr__(self):
        """Returns the __init__ call with current attribute values."""

        params = inspect.signature(self.__init__).parameters
        args = ', '.join('{}={!r}'.format(name, getattr(self, name))
                         for name in params if hasattr(self, name))
        return '{}({})'.format(type(self).__name__, args)

    def __str__(self):
        """Returns this instances print representation."""

        cls_name = type(self).__name__
        msg_start = cls_name + ' Object\n' + '---Attributes---'
        pp = pprint.PrettyPrinter(sort_dicts=False, compact=True)
        msg_body = pp.pformat(self._fetch_attributes())
        msg_end = '\nType help({}) for full documentation'.format(cls_name)
        return '\n'.join([msg_start, msg_body, msg_end])
