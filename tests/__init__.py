"""
hrgptyper test suite.

Tests are organized by module:
- test_catalog: Motif catalog and counting order validation
- test_scanner: Sequential masking scanner
- test_composition: Residue class composition and coverage
- test_classification: MAAB rules and GPI resolution
- test_sequence: Sequence input and normalization
- test_pipeline: Batch classification and result tables
- test_export: Result file formats
- test_cli: Command line interface
"""
