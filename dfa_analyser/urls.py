from django.urls import path
from . import views

urlpatterns = [
    # Word simulation
    path('api/run-word/', views.run_word, name='run_word'),

    # Structural properties
    path('api/check-properties/', views.check_properties, name='check_properties'),

    # Language queries
    path('api/language-properties/', views.language_properties, name='language_properties'),
    path('api/cardinality/', views.cardinality, name='cardinality'),
    path('api/words-of-length/', views.words_of_length, name='words_of_length'),
    path('api/random-word/', views.random_word, name='random_word'),
    path('api/compare/', views.compare, name='compare'),

    # Structural edits
    path('api/complete-dfa/', views.complete_dfa, name='complete_dfa'),
    path('api/remove-state/', views.remove_state, name='remove_state'),

    # Definition text
    path('api/parse-definition/', views.parse_definition_view, name='parse_definition'),
]
