"""
mustache-pipe test suite
========================

Test Modules
------------
- test_models.py: SourceFile and RenderOptions
- test_view.py: JSON view loading
- test_partials.py: Partial discovery and loading
- test_renderer.py: Single-file rendering
- test_stage.py: The transform stage against golden renderings
- test_io.py: Reading and writing files
- test_cli.py: Command-line interface

Running Tests
-------------
    # Run all tests
    pytest

    # Run specific test class
    pytest tests/test_stage.py::TestPartials
"""
