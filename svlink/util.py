import logging
from typing import Dict

from .constants import LinkNamespace

logger = logging.getLogger('svlink')


class WeakLinkNamespace(LinkNamespace):
    """
    namespace where every attribute can be overridden by its environment variable equivalent
    """

    def is_env_overwritable(self, attr):
        return True


def resolve_settings(defaults: LinkNamespace, **kwargs) -> Dict:
    """
    combine explicit keyword arguments with the default settings. Explicit arguments take priority over
    environment variables which take priority over the namespace values

    Raises:
        KeyError: a keyword argument is not a known setting
    """
    settings = defaults.to_dict()
    for attr, value in kwargs.items():
        if attr not in settings:
            raise KeyError('unexpected setting', attr, sorted(settings))
        if value is not None:
            settings[attr] = value
    for attr, value in settings.items():
        logger.debug(f'setting {attr}={value!r}: {defaults.define(attr)}')
    return settings
