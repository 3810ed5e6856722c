import random

from django.test import TestCase
from dfa_analyser.dfa import AlphabetMismatch, DFA, Recogniser
from dfa_analyser.fsa_model import Automaton


def contains_00():
    """Words over {0, 1} containing '00'."""
    return DFA(Automaton(
        ['q0', 'q1', 'q2'], ['0', '1'], 'q0', ['q2'],
        [
            ('q0', '0', 'q1'), ('q0', '1', 'q0'),
            ('q1', '0', 'q2'), ('q1', '1', 'q0'),
            ('q2', '0', 'q2'), ('q2', '1', 'q2'),
        ]
    ))


def avoids_00():
    """Complement of contains_00: words over {0, 1} without '00'."""
    return DFA(Automaton(
        ['q0', 'q1', 'q2'], ['0', '1'], 'q0', ['q0', 'q1'],
        [
            ('q0', '0', 'q1'), ('q0', '1', 'q0'),
            ('q1', '0', 'q2'), ('q1', '1', 'q0'),
            ('q2', '0', 'q2'), ('q2', '1', 'q2'),
        ]
    ))


def all_words():
    """Every word over {0, 1}."""
    return DFA(Automaton(['u'], ['0', '1'], 'u', ['u'], [('u', '0', 'u'), ('u', '1', 'u')]))


def short_words():
    """Accepts exactly 'a', 'b' and 'ab'."""
    return DFA(Automaton(
        ['s0', 's1', 's2'], ['a', 'b'], 's0', ['s1', 's2'],
        [('s0', 'a', 's1'), ('s0', 'b', 's2'), ('s1', 'b', 's2')]
    ))


def unreachable_accept():
    """Looping start state that never reaches its accepting state."""
    return DFA(Automaton(['p0', 'p1'], ['a'], 'p0', ['p1'], [('p0', 'a', 'p0')]))


class TestRunWord(TestCase):
    """Test cases for word acceptance"""

    def test_is_a_recogniser(self):
        self.assertIsInstance(contains_00(), Recogniser)

    def test_rejected_word(self):
        # 0 -> q1, 1 -> q0, 0 -> q1; q1 is not accepting
        self.assertFalse(contains_00().run_word('010'))

    def test_accepted_words(self):
        dfa = contains_00()
        for word in ['00', '100', '1001', '0000']:
            self.assertTrue(dfa.run_word(word), "%s should be accepted" % word)

    def test_missing_transition_rejects(self):
        dfa = short_words()
        self.assertTrue(dfa.run_word('ab'))
        self.assertFalse(dfa.run_word('ba'))
        self.assertFalse(dfa.run_word('abb'))

    def test_unknown_symbol_rejects(self):
        self.assertFalse(contains_00().run_word('002'))

    def test_agrees_with_input_path(self):
        dfa = contains_00()
        for word in ['', '0', '01', '00', '010', '1100']:
            self.assertEqual(dfa.run_word(word), dfa.automaton.get_input_path(word).accepted)


class TestContainment(TestCase):
    """Test cases for subset, superset and disjointness"""

    def test_subset_is_reflexive(self):
        for dfa in [contains_00(), avoids_00(), all_words()]:
            self.assertTrue(dfa.issubset(dfa))

    def test_subset(self):
        self.assertTrue(contains_00().issubset(all_words()))
        self.assertFalse(all_words().issubset(contains_00()))

    def test_superset(self):
        self.assertTrue(all_words().issuperset(contains_00()))
        self.assertFalse(contains_00().issuperset(all_words()))

    def test_alphabet_mismatch(self):
        with self.assertRaises(AlphabetMismatch):
            contains_00().issubset(short_words())
        with self.assertRaises(AlphabetMismatch):
            contains_00().issuperset(short_words())

    def test_alphabet_mismatch_with_repeated_symbol(self):
        # Same length, but {a} differs from {a, b}
        repeated = DFA(Automaton(['s'], ['a', 'a'], 's', ['s'], [('s', 'a', 's')]))
        pair = DFA(Automaton(['t'], ['a', 'b'], 't', ['t'], [('t', 'a', 't'), ('t', 'b', 't')]))
        with self.assertRaises(AlphabetMismatch):
            repeated.issubset(pair)
        with self.assertRaises(AlphabetMismatch):
            pair.issubset(repeated)

    def test_alphabet_order_does_not_matter(self):
        reordered = DFA(Automaton(['u'], ['1', '0'], 'u', ['u'], [('u', '0', 'u'), ('u', '1', 'u')]))
        self.assertTrue(contains_00().issubset(reordered))

    def test_alphabet_mismatch_is_a_value_error(self):
        self.assertTrue(issubclass(AlphabetMismatch, ValueError))

    def test_disjoint(self):
        self.assertTrue(contains_00().isdisjoint(avoids_00()))
        self.assertFalse(contains_00().isdisjoint(all_words()))

    def test_disjoint_does_not_check_alphabets(self):
        # No shared symbols: only the start pair is examined
        self.assertTrue(contains_00().isdisjoint(short_words()))

    def test_missing_transitions_are_pruned(self):
        # 'zeros' cannot read '1', so the word '1' is never examined
        zeros = DFA(Automaton(['e0'], ['0', '1'], 'e0', ['e0'], [('e0', '0', 'e0')]))
        self.assertTrue(all_words().issubset(zeros))

        # Completing the other automaton makes the answer exact
        self.assertFalse(all_words().issubset(zeros.complete()))

    def test_mutual_containment_means_equal_words(self):
        renamed = DFA(Automaton(
            ['a', 'b', 'c'], ['0', '1'], 'a', ['c'],
            [
                ('a', '0', 'b'), ('a', '1', 'a'),
                ('b', '0', 'c'), ('b', '1', 'a'),
                ('c', '0', 'c'), ('c', '1', 'c'),
            ]
        ))
        original = contains_00()
        self.assertTrue(original.issubset(renamed))
        self.assertTrue(renamed.issubset(original))
        for k in range(6):
            self.assertEqual(set(original.words_of_length(k)), set(renamed.words_of_length(k)))

    def test_disjoint_means_no_common_words(self):
        first, second = contains_00(), avoids_00()
        self.assertTrue(first.isdisjoint(second))
        for k in range(7):
            common = set(first.words_of_length(k)) & set(second.words_of_length(k))
            self.assertEqual(common, set())


class TestLanguageProperties(TestCase):
    """Test cases for emptiness, finiteness and cardinality"""

    def test_reachable_states(self):
        self.assertEqual(contains_00().reachable_states(), {'q0', 'q1', 'q2'})
        self.assertEqual(unreachable_accept().reachable_states(), {'p0'})

    def test_isempty(self):
        self.assertFalse(contains_00().isempty())
        self.assertFalse(short_words().isempty())
        self.assertTrue(unreachable_accept().isempty())

    def test_start_state_accepting_is_not_empty(self):
        dfa = DFA(Automaton(['s'], ['a'], 's', ['s'], []))
        self.assertFalse(dfa.isempty())

    def test_isfinite(self):
        self.assertFalse(contains_00().isfinite())
        self.assertTrue(short_words().isfinite())

    def test_cycle_through_rejecting_states_only(self):
        # The loop on p0 never revisits an accepting state
        self.assertTrue(unreachable_accept().isfinite())

    def test_accepting_self_loop_on_start(self):
        dfa = DFA(Automaton(['s'], ['a'], 's', ['s'], [('s', 'a', 's')]))
        self.assertFalse(dfa.isfinite())
        self.assertIsNone(dfa.cardinality())

    def test_long_chain_does_not_hit_recursion_limit(self):
        size = 1500
        states = ['s%d' % i for i in range(size)]
        transitions = [(states[i], 'a', states[i + 1]) for i in range(size - 1)]
        dfa = DFA(Automaton(states, ['a'], 's0', [states[-1]], transitions))
        self.assertTrue(dfa.isfinite())

    def test_cardinality_infinite(self):
        self.assertIsNone(contains_00().cardinality())

    def test_cardinality_finite(self):
        self.assertEqual(short_words().cardinality(), 3)
        self.assertEqual(unreachable_accept().cardinality(), 0)

    def test_cardinality_length_limit(self):
        states = ['s%d' % i for i in range(26)]
        transitions = [(states[i], 'a', states[i + 1]) for i in range(25)]
        # Accepts 'a' * 5 and 'a' * 25
        dfa = DFA(Automaton(states, ['a'], 's0', ['s5', 's25'], transitions))
        self.assertEqual(dfa.cardinality(), 1)
        self.assertEqual(dfa.cardinality(limit=30), 2)

    def test_empty_iff_cardinality_zero(self):
        for dfa in [short_words(), unreachable_accept()]:
            self.assertEqual(dfa.isempty(), dfa.cardinality() == 0)


class TestWordEnumeration(TestCase):
    """Test cases for words_of_length and random_word"""

    def test_words_of_length(self):
        dfa = contains_00()
        self.assertEqual(list(dfa.words_of_length(0)), [])
        self.assertEqual(list(dfa.words_of_length(1)), [])
        self.assertEqual(list(dfa.words_of_length(2)), ['00'])
        self.assertEqual(list(dfa.words_of_length(3)), ['000', '001', '100'])

    def test_words_of_length_zero_with_accepting_start(self):
        self.assertEqual(list(avoids_00().words_of_length(0)), [''])

    def test_words_have_requested_length_and_are_accepted(self):
        dfa = contains_00()
        for k in range(6):
            for word in dfa.words_of_length(k):
                self.assertEqual(len(word), k)
                self.assertTrue(dfa.run_word(word))

    def test_words_of_length_is_restartable(self):
        dfa = short_words()
        self.assertEqual(list(dfa.words_of_length(1)), ['a', 'b'])
        self.assertEqual(list(dfa.words_of_length(1)), ['a', 'b'])

    def test_words_of_length_counts_every_path(self):
        # Both symbols lead to the same state; each word is still produced
        self.assertEqual(len(list(all_words().words_of_length(4))), 16)

    def test_negative_length(self):
        with self.assertRaises(ValueError):
            list(contains_00().words_of_length(-1))

    def test_random_word(self):
        dfa = contains_00()
        word = dfa.random_word(3, random.Random(7))
        self.assertIn(word, ['000', '001', '100'])

    def test_random_word_is_repeatable_with_seed(self):
        dfa = all_words()
        first = dfa.random_word(5, random.Random(42))
        second = dfa.random_word(5, random.Random(42))
        self.assertEqual(first, second)

    def test_random_word_without_rng(self):
        self.assertEqual(short_words().random_word(2), 'ab')

    def test_random_word_none(self):
        self.assertIsNone(contains_00().random_word(1))
        self.assertIsNone(unreachable_accept().random_word(3))


class TestWordLengths(TestCase):
    """Test cases for minimum and maximum word length"""

    def test_minimum_word_length(self):
        # '00': q0 -> q1 -> q2
        self.assertEqual(contains_00().minimum_word_length(), 2)
        self.assertEqual(short_words().minimum_word_length(), 1)
        self.assertEqual(avoids_00().minimum_word_length(), 0)

    def test_minimum_word_length_none(self):
        self.assertIsNone(unreachable_accept().minimum_word_length())

    def test_minimum_is_first_non_empty_length(self):
        dfa = contains_00()
        minimum = dfa.minimum_word_length()
        for k in range(minimum):
            self.assertEqual(list(dfa.words_of_length(k)), [])
        self.assertNotEqual(list(dfa.words_of_length(minimum)), [])

    def test_maximum_word_length_layered(self):
        dfa = DFA(Automaton(['s0', 's1', 's2'], ['a', 'b'], 's0', ['s2'],
                            [('s0', 'a', 's1'), ('s1', 'a', 's2')]))
        self.assertEqual(dfa.maximum_word_length(), 2)

    def test_maximum_word_length_uses_shortest_distances(self):
        # 'ab' reaches s2 too, but s2 is first seen at distance 1
        self.assertEqual(short_words().maximum_word_length(), 1)

    def test_maximum_word_length_none(self):
        self.assertIsNone(contains_00().maximum_word_length())
        self.assertIsNone(unreachable_accept().maximum_word_length())


class TestComplete(TestCase):
    """Test cases for completing a DFA with a trap state"""

    def test_complete_adds_trap_state(self):
        dfa = short_words()
        completed = dfa.complete()

        self.assertTrue(completed.automaton.is_complete())
        self.assertTrue(completed.automaton.is_deterministic())
        self.assertEqual(completed.automaton.states, ['s0', 's1', 's2', 'dead0'])
        self.assertNotIn('dead0', completed.automaton.accept)
        self.assertIn(('s1', 'a', 'dead0'), completed.automaton.transitions)
        self.assertIn(('dead0', 'b', 'dead0'), completed.automaton.transitions)

        # Language is unchanged and the original is untouched
        for k in range(4):
            self.assertEqual(list(completed.words_of_length(k)), list(dfa.words_of_length(k)))
        self.assertFalse(dfa.automaton.is_complete())

    def test_complete_avoids_name_clash(self):
        dfa = DFA(Automaton(['dead0', 'x'], ['a'], 'dead0', ['x'], [('dead0', 'a', 'x')]))
        completed = dfa.complete()
        self.assertIn('dead1', completed.automaton.states)

    def test_complete_when_already_complete(self):
        dfa = contains_00()
        completed = dfa.complete()
        self.assertIsNot(completed, dfa)
        self.assertEqual(completed.automaton, dfa.automaton)


class TestConstructors(TestCase):
    """Test cases for building a DFA from external representations"""

    def test_from_dict(self):
        dfa = DFA.from_dict({
            'states': ['S0', 'S1'],
            'alphabet': ['a', 'b'],
            'transitions': {
                'S0': {'a': ['S0'], 'b': ['S1']},
                'S1': {'a': ['S0'], 'b': ['S1']}
            },
            'startingState': 'S0',
            'acceptingStates': ['S1']
        })
        self.assertTrue(dfa.run_word('ab'))
        self.assertFalse(dfa.run_word('ba'))

    def test_from_definition(self):
        dfa = DFA.from_definition(
            "states: q0, q1, q2\n"
            "alphabet: 0, 1\n"
            "start: q0\n"
            "accept: q2\n"
            "transitions:\n"
            "q0,0->q1\nq0,1->q0\nq1,0->q2\nq1,1->q0\nq2,0->q2\nq2,1->q2\n"
        )
        self.assertEqual(dfa.automaton, contains_00().automaton)
