"""Phase 2: TOON formatting.

Test Modules:
- test_quotes.py: smart quoting and escaping of values and keys
- test_numbers.py: canonical number rendering
- test_classifier.py: array layout classification
- test_schema.py: field lists and type inference
- test_emitter.py: full document layouts
- test_hypothesis_properties.py: property-based invariants
"""
