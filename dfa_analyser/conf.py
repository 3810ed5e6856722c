from django.conf import settings

from .dfa import CARDINALITY_LENGTH_LIMIT

DEFAULTS = {
    'CARDINALITY_LENGTH_LIMIT': CARDINALITY_LENGTH_LIMIT,
    # Largest k accepted by the word enumeration endpoints
    'MAX_ENUMERATION_LENGTH': 10,
    'RANDOM_SEED': None,
}


def get_setting(name: str):
    """
    Look up an analyser setting.

    Values come from the ``DFA_ANALYSER`` dictionary in the Django settings,
    falling back to ``DEFAULTS``.
    """
    if name not in DEFAULTS:
        raise KeyError(f"Unknown analyser setting: {name}")
    overrides = getattr(settings, 'DFA_ANALYSER', {})
    return overrides.get(name, DEFAULTS[name])
