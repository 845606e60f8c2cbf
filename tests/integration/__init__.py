"""tests.integration package

This sub-package groups **integration-level** test suites that exercise
modelschema through its public surface (``modelschema.to_models``,
``SchemaSynthesizer`` and ``SchemaBuilder``) together with environment-driven
configuration.  Keeping them apart from the *unit* suites lets developers run
only the fast unit subset during TDD cycles while still enabling end-to-end
validation in CI via `pytest -m integration`.
"""
