"""
Test suites package.

This repository keeps `demoqa_suites` importable to support:
  - IDE navigation
  - programmatic runners (e.g., `run_tests.py`)
  - unit tests importing the shared fakes
"""
