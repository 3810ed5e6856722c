from typing import Dict, Iterator, Tuple

from .dfa import DFA


def is_connected(dfa: DFA) -> bool:
    """
    Checks if the automaton is connected.

    An automaton is connected if all states are reachable from the starting state.

    Args:
        dfa: The DFA to check

    Returns:
        bool: True if the automaton is connected, False otherwise
    """
    states = dfa.automaton.states
    # Trivially connected if no states
    if not states:
        return True

    if not dfa.automaton.has_state(dfa.automaton.start):
        return False

    reachable = dfa.reachable_states()
    return all(state in reachable for state in states)


def check_all_properties(dfa: DFA) -> Dict:
    """
    Check all structural properties at once.

    Args:
        dfa: The DFA to check

    Returns:
        Dict: Dictionary containing all property check results:
        {
            'deterministic': bool,
            'complete': bool,
            'connected': bool
        }
    """
    return {
        'deterministic': dfa.automaton.is_deterministic(),
        'complete': dfa.automaton.is_complete(),
        'connected': is_connected(dfa)
    }


def _iter_transition_triples(transitions) -> Iterator[Tuple]:
    if isinstance(transitions, dict):
        for source, by_symbol in transitions.items():
            if not isinstance(by_symbol, dict):
                raise ValueError(f'transitions for state {source} must be a dictionary')
            for symbol, targets in by_symbol.items():
                if isinstance(targets, str):
                    targets = [targets]
                if not isinstance(targets, list):
                    raise ValueError(f'targets of {source} on {symbol} must be a list')
                for target in targets:
                    yield source, symbol, target
    else:
        for record in transitions:
            if not isinstance(record, dict) or not all(k in record for k in ('from', 'symbol', 'to')):
                raise ValueError('transition records need from, symbol and to')
            yield record['from'], record['symbol'], record['to']


def validate_fsa_structure(fsa: Dict) -> Dict:
    """
    Validates that a JSON automaton definition is well formed and that every
    state it refers to is declared.

    Args:
        fsa: The FSA dictionary to validate

    Returns:
        Dict: Validation result with 'valid' boolean and optional 'error' message
    """
    if not isinstance(fsa, dict):
        return {'valid': False, 'error': 'FSA must be a dictionary'}

    required_keys = ['states', 'alphabet', 'transitions', 'startingState', 'acceptingStates']

    # Check all required keys exist
    for key in required_keys:
        if key not in fsa:
            return {'valid': False, 'error': f'Missing required key: {key}'}

    if not isinstance(fsa['states'], list):
        return {'valid': False, 'error': 'states must be a list'}

    if not isinstance(fsa['alphabet'], list):
        return {'valid': False, 'error': 'alphabet must be a list'}

    if not isinstance(fsa['transitions'], (dict, list)):
        return {'valid': False, 'error': 'transitions must be a dictionary or a list'}

    if not isinstance(fsa['acceptingStates'], list):
        return {'valid': False, 'error': 'acceptingStates must be a list'}

    if len(set(fsa['states'])) != len(fsa['states']):
        return {'valid': False, 'error': 'states must not contain duplicates'}

    for symbol in fsa['alphabet']:
        if not isinstance(symbol, str) or len(symbol) != 1:
            return {'valid': False, 'error': f'Alphabet symbol {symbol!r} must be a single character'}

    if len(set(fsa['alphabet'])) != len(fsa['alphabet']):
        return {'valid': False, 'error': 'alphabet must not contain duplicates'}

    # Only check starting state if it exists and there are states
    if fsa.get('startingState') and fsa.get('states'):
        if fsa['startingState'] not in fsa['states']:
            return {'valid': False, 'error': 'Starting state not in states list'}

    for state in fsa['acceptingStates']:
        if state not in fsa['states']:
            return {'valid': False, 'error': f'Accepting state {state} not in states list'}

    try:
        for source, symbol, target in _iter_transition_triples(fsa['transitions']):
            if source not in fsa['states']:
                return {'valid': False, 'error': f'Transition source {source} not in states list'}
            if target not in fsa['states']:
                return {'valid': False, 'error': f'Transition target {target} not in states list'}
            if symbol not in fsa['alphabet']:
                return {'valid': False, 'error': f"Transition symbol '{symbol}' not in alphabet"}
    except ValueError as e:
        return {'valid': False, 'error': str(e)}

    return {'valid': True}
