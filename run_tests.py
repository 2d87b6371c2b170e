# run_tests.py
"""
Test runner for the client roster
Run this file to execute the Django test suites of every app
"""
import os
import sys

import django

# Setup Django
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings.development')
django.setup()

from django.conf import settings
from django.test.utils import get_runner

TEST_APPS = [
    'apps.core',
    'apps.clients',
]


def run_tests(labels):
    """Run the given test labels and report the number of failures"""
    print("=" * 80)
    print("CLIENT ROSTER TEST SUITE: " + ", ".join(labels))
    print("=" * 80)
    print()

    TestRunner = get_runner(settings)
    test_runner = TestRunner(verbosity=2, interactive=False)

    failures = test_runner.run_tests(labels)

    print()
    print("=" * 80)
    if failures:
        print(f"TESTS FAILED: {failures} failure(s)")
    else:
        print("ALL TESTS PASSED")
    print("=" * 80)

    return failures


if __name__ == '__main__':
    import argparse

    parser = argparse.ArgumentParser(description='Run tests for the client roster')
    parser.add_argument(
        '--app',
        type=str,
        choices=[label.split('.')[-1] for label in TEST_APPS],
        help='Run tests for a single app (core or clients)'
    )

    args = parser.parse_args()

    labels = [f'apps.{args.app}'] if args.app else TEST_APPS
    sys.exit(bool(run_tests(labels)))
