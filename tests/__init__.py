"""Test suite for the formstate engine.

This package contains tests for:
- Field catalogue and record helpers
- Validation rule table (every rule, independence, purity)
- Event system (emission, serialization, listener isolation)
- FormStateEngine operations and contract violations
- Integration scenarios (failed submit, successful submit, reset, rating)
"""
