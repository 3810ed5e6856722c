import json
import logging
import random

from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_POST

from .conf import get_setting
from .definition import parse_definition
from .dfa import DFA
from .fsa_model import Automaton
from .fsa_properties import check_all_properties, validate_fsa_structure

logger = logging.getLogger(__name__)


class RequestError(ValueError):
    """A client error carrying the message to return with a 400 response."""


def _bad_request(message):
    logger.info("Rejected request: %s", message)
    return JsonResponse({'error': message}, status=400)


def _server_error(e):
    logger.exception("Unhandled error while analysing automaton")
    return JsonResponse({'error': f'Server error: {str(e)}'}, status=500)


def _load_automaton(data, key='fsa'):
    """
    Build an automaton from the request body.

    The automaton is read from ``data[key]`` as JSON, or from
    ``data['definition']`` as definition text when ``key`` is 'fsa'.

    Raises:
        RequestError: If the definition is missing or invalid
    """
    fsa = data.get(key)
    if not fsa and key == 'fsa' and data.get('definition'):
        fsa = parse_definition(data['definition']).to_dict()

    if not fsa:
        raise RequestError('Missing FSA definition')

    validation = validate_fsa_structure(fsa)
    if not validation['valid']:
        raise RequestError(validation['error'])

    return Automaton.from_dict(fsa)


def _load_dfa(data, key='fsa'):
    automaton = _load_automaton(data, key)
    if not automaton.is_deterministic():
        raise RequestError('This operation requires a deterministic FSA. '
                           'The provided FSA is non-deterministic.')
    return DFA(automaton)


def _get_length(data):
    """Read and bound the requested word length."""
    length = data.get('length')
    if length is None:
        raise RequestError('Missing length parameter')
    try:
        length = int(length)
    except (TypeError, ValueError):
        raise RequestError('length must be an integer')
    if length < 0:
        raise RequestError('length must be non-negative')

    max_length = get_setting('MAX_ENUMERATION_LENGTH')
    if length > max_length:
        raise RequestError(f'length must not exceed {max_length}')
    return length


@csrf_exempt
@require_POST
def run_word(request):
    """
    Django view to trace an input word through a DFA.

    Expects a POST request with a JSON body containing:
    - fsa (or definition): The automaton
    - input: The input string to run

    Returns a JSON response with the verdict and the transitions taken.
    """
    try:
        data = json.loads(request.body)
        dfa = _load_dfa(data)
        input_string = data.get('input', '')
        if not isinstance(input_string, str):
            raise RequestError('input must be a string')
        logger.debug("Running %r on %r", input_string, dfa)

        path, accepted = dfa.automaton.get_input_path(input_string)
        response = {
            'accepted': accepted,
            'path': [list(t) for t in path],
        }

        if not accepted:
            if len(path) < len(input_string):
                current = path[-1].target if path else dfa.automaton.start
                response['rejection_reason'] = (
                    f"No transition defined for symbol '{input_string[len(path)]}' "
                    f"from state '{current}'")
            else:
                final_state = path[-1].target if path else dfa.automaton.start
                response['rejection_reason'] = f"Final state '{final_state}' is not an accepting state"
            response['rejection_position'] = len(path)

        return JsonResponse(response)

    except ValueError as e:
        return _bad_request(str(e))
    except Exception as e:
        return _server_error(e)


@csrf_exempt
@require_POST
def check_properties(request):
    """
    Django view to check structural properties (deterministic, complete, connected).
    """
    try:
        data = json.loads(request.body)
        automaton = _load_automaton(data)
        properties = check_all_properties(DFA(automaton))

        return JsonResponse({
            'properties': properties,
            'summary': {
                'total_states': len(automaton.states),
                'alphabet_size': len(automaton.alphabet),
                'starting_state': automaton.start,
                'accepting_states_count': len(automaton.accept),
                'transitions_count': len(automaton.transitions),
            }
        })

    except ValueError as e:
        return _bad_request(str(e))
    except Exception as e:
        return _server_error(e)


@csrf_exempt
@require_POST
def language_properties(request):
    """
    Django view to answer emptiness, finiteness and word length questions.

    Lengths are null when no word qualifies; maximum_word_length is also null
    for infinite languages.
    """
    try:
        data = json.loads(request.body)
        dfa = _load_dfa(data)

        return JsonResponse({
            'empty': dfa.isempty(),
            'finite': dfa.isfinite(),
            'minimum_word_length': dfa.minimum_word_length(),
            'maximum_word_length': dfa.maximum_word_length(),
        })

    except ValueError as e:
        return _bad_request(str(e))
    except Exception as e:
        return _server_error(e)


@csrf_exempt
@require_POST
def cardinality(request):
    try:
        data = json.loads(request.body)
        dfa = _load_dfa(data)
        limit = get_setting('CARDINALITY_LENGTH_LIMIT')
        count = dfa.cardinality(limit)

        return JsonResponse({
            'cardinality': count,
            'finite': count is not None,
            'length_limit': limit,
        })

    except ValueError as e:
        return _bad_request(str(e))
    except Exception as e:
        return _server_error(e)


@csrf_exempt
@require_POST
def words_of_length(request):
    """
    Django view listing every accepted word of a given length.

    Expects a POST request with a JSON body containing:
    - fsa (or definition): The automaton
    - length: Word length, at most MAX_ENUMERATION_LENGTH
    """
    try:
        data = json.loads(request.body)
        dfa = _load_dfa(data)
        length = _get_length(data)
        words = list(dfa.words_of_length(length))

        return JsonResponse({
            'length': length,
            'words': words,
            'count': len(words),
        })

    except ValueError as e:
        return _bad_request(str(e))
    except Exception as e:
        return _server_error(e)


@csrf_exempt
@require_POST
def random_word(request):
    """
    Django view returning one accepted word of a given length chosen at random.

    An optional integer 'seed' in the body makes the choice repeatable; the
    RANDOM_SEED setting is used otherwise.
    """
    try:
        data = json.loads(request.body)
        dfa = _load_dfa(data)
        length = _get_length(data)
        seed = data.get('seed', get_setting('RANDOM_SEED'))
        if seed is not None and (isinstance(seed, bool) or not isinstance(seed, (int, str))):
            raise RequestError('seed must be an integer or a string')

        return JsonResponse({
            'length': length,
            'word': dfa.random_word(length, random.Random(seed)),
        })

    except ValueError as e:
        return _bad_request(str(e))
    except Exception as e:
        return _server_error(e)


@csrf_exempt
@require_POST
def compare(request):
    """
    Django view comparing the languages of two DFAs.

    Expects a POST request with a JSON body containing:
    - fsa: The first automaton
    - other: The second automaton, over the same alphabet

    Returns a JSON response with subset, superset and disjoint flags.
    """
    try:
        data = json.loads(request.body)
        dfa = _load_dfa(data)
        other = _load_dfa(data, key='other')

        return JsonResponse({
            'subset': dfa.issubset(other),
            'superset': dfa.issuperset(other),
            'disjoint': dfa.isdisjoint(other),
        })

    except ValueError as e:
        return _bad_request(str(e))
    except Exception as e:
        return _server_error(e)


@csrf_exempt
@require_POST
def complete_dfa(request):
    """
    Django view to handle DFA completion requests.

    Returns a JSON response with the completed DFA.
    """
    try:
        data = json.loads(request.body)
        dfa = _load_dfa(data)
        completed = dfa.complete()

        return JsonResponse({
            'completed_fsa': completed.automaton.to_dict(),
            'dead_state_added': len(completed.automaton.states) > len(dfa.automaton.states),
        })

    except ValueError as e:
        return _bad_request(str(e))
    except Exception as e:
        return _server_error(e)


@csrf_exempt
@require_POST
def remove_state(request):
    """
    Django view removing a state and everything attached to it.

    Expects a POST request with a JSON body containing:
    - fsa (or definition): The automaton
    - state: The state to remove
    """
    try:
        data = json.loads(request.body)
        automaton = _load_automaton(data)
        state = data.get('state')

        if not state:
            raise RequestError('Missing state parameter')
        if not automaton.has_state(state):
            raise RequestError(f'State {state} not in states list')

        automaton.remove_state(state)
        return JsonResponse({'fsa': automaton.to_dict()})

    except ValueError as e:
        return _bad_request(str(e))
    except Exception as e:
        return _server_error(e)


@csrf_exempt
@require_POST
def parse_definition_view(request):
    """
    Django view converting definition text into the JSON representation.
    """
    try:
        data = json.loads(request.body)
        definition = data.get('definition')
        if not definition:
            raise RequestError('Missing definition')

        fsa = parse_definition(definition).to_dict()
        validation = validate_fsa_structure(fsa)
        if not validation['valid']:
            raise RequestError(validation['error'])

        return JsonResponse({'fsa': fsa})

    except ValueError as e:
        return _bad_request(str(e))
    except Exception as e:
        return _server_error(e)
