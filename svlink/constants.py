"""
module responsible for the controlled vocabularies and namespace type used throughout the svlink package
"""
import os


def cast_boolean(input_value):
    value = str(input_value).lower()
    if value in ['t', 'true', '1', 'y', 'yes', '+']:
        return True
    elif value in ['f', 'false', '0', 'n', 'no', '-']:
        return False
    raise TypeError('casting to boolean failed', input_value)


class LinkNamespace:
    """
    Namespace to hold module constants and settings

    Example:
        >>> nspace = LinkNamespace(SPLIT='split alignment')
        >>> nspace.SPLIT
        'split alignment'
    """

    def __init__(self, **kwargs):
        object.__setattr__(self, '_defns', {})
        object.__setattr__(self, '_types', {})
        object.__setattr__(self, '_members', {})
        object.__setattr__(self, '_env_prefix', 'SVLINK')

        for attr, val in kwargs.items():
            self.add(attr, val)

    def get_env_name(self, attr):
        """
        Example:
            >>> LinkNamespace().get_env_name('min_split_count')
            'SVLINK_MIN_SPLIT_COUNT'
        """
        return '{}_{}'.format(self._env_prefix, attr).upper()

    def is_env_overwritable(self, attr):
        return False

    def __getattribute__(self, attr):
        try:
            return object.__getattribute__(self, attr)
        except AttributeError as err:
            variables = object.__getattribute__(self, '_members')
            if attr not in variables:
                raise err
            if self.is_env_overwritable(attr):
                env_name = self.get_env_name(attr)
                if env_name in os.environ:
                    return self._types[attr](os.environ[env_name].strip())
            return variables[attr]

    def __setattr__(self, attr, val):
        raise AttributeError('use add to set namespace attributes', attr)

    def keys(self):
        return list(self._members)

    def values(self):
        return [getattr(self, k) for k in self._members]

    def to_dict(self):
        return {k: getattr(self, k) for k in self._members}

    def define(self, attr):
        """the definition given when the attribute was added, if any"""
        return self._defns.get(attr, '')

    def enforce(self, value):
        """
        checks that the current namespace has a given value

        Returns:
            the input value

        Raises:
            KeyError: the value did not exist

        Example:
            >>> EVIDENCE_CLASS.enforce('discordant pair')
            'discordant pair'
        """
        if value not in self.values():
            raise KeyError('value {0} is not a valid member of '.format(repr(value)), self.values())
        return value

    def add(self, attr, value, defn=None, cast_type=None):
        """
        Add an attribute to the name space

        Args:
            attr (str): name of the attribute being added
            value: the value of the attribute
            defn (str): the definition of the setting
            cast_type (callable): the function used to cast environment variable overrides. Defaults to the type of
                the value

        Raises:
            AttributeError: the attribute already exists or is private
        """
        if attr in self._members:
            raise AttributeError('Cannot respecify existing attribute', attr, self._members[attr])
        if attr.startswith('_'):
            raise AttributeError('cannot set private', attr)
        cast_type = cast_type or type(value)
        self._types[attr] = cast_boolean if cast_type == bool else cast_type
        if defn:
            self._defns[attr] = defn
        self._members[attr] = value


EVIDENCE_CLASS = LinkNamespace(SPLIT='split alignment', PAIR='discordant pair')
"""
holds controlled vocabulary for the classes of breakpoint evidence

- ``SPLIT``: a read whose alignment is split across the two breakpoints
- ``PAIR``: a read pair whose mates align discordantly with respect to the library fragment size/orientation
"""

STRAND = LinkNamespace(POS='+', NEG='-')
"""
holds controlled vocabulary for displaying strand flags. A strand flag of True is the positive/forward strand

- ``POS``: the positive/forward strand
- ``NEG``: the negative/reverse strand
"""


def strand_symbol(forward_strand):
    """
    Example:
        >>> strand_symbol(True)
        '+'
    """
    return STRAND.POS if forward_strand else STRAND.NEG
