"""
Pokemon description service package.

The service answers lookups by species name with the Shakespearean
translation of the species' PokeAPI description:
- Cache: bounded in-memory LRU of resolved descriptions
- Orchestration: PokeAPI lookup, then translation, with fallback to the
  untranslated text when the translator is down or rate limited

Structure:
- app.main: FastAPI app, routes and lifecycle wiring.
- app.adapters: HTTP clients for PokeAPI and the Shakespeare Translator.
- app.caching: Bounded LRU cache.
- app.domain: Value types and the lookup orchestrator.
"""
