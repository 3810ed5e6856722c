from django.apps import AppConfig


class DfaAnalyserConfig(AppConfig):
    name = 'dfa_analyser'
    verbose_name = 'DFA analyser'
