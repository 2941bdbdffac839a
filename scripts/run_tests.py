import os
import logging
import sys
import argparse
from datetime import datetime

import unittest

base_path = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, base_path)

from PySubconvert.Helpers.Tests import create_logfile, end_logfile, separator
from tests.unit_tests import discover_tests

def format_summary_line(label: str, result: unittest.TestResult) -> str:
    ok = result.wasSuccessful()
    return f"  {label:<12}: run: {result.testsRun:>3} failures: {len(result.failures):>3} errors: {len(result.errors):>3} skipped: {len(result.skipped):>3} status={'OK ' if ok else 'FAIL'}"

logging.getLogger().setLevel(logging.DEBUG)
console_handler = logging.StreamHandler(sys.stdout)
console_handler.setLevel(logging.WARNING)  # Only show warnings and above on console
console_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
if console_handler not in logging.getLogger().handlers:
    logging.getLogger().addHandler(console_handler)

def run_unit_tests(results_path: str, test_name: str|None = None) -> unittest.TestResult:
    """Run the PySubconvert unit tests, optionally only those in a single test module."""
    log_file = create_logfile(results_path, "unit_tests.log")

    start_stamp = datetime.now().strftime("%Y-%m-%d at %H:%M")
    logging.info(separator)
    logging.info("Running unit tests at " + start_stamp)
    logging.info(separator)

    runner = unittest.TextTestRunner(verbosity=1)

    if test_name:
        suite = unittest.defaultTestLoader.loadTestsFromName(f"tests.PySubconvertTests.{test_name}")
    else:
        suite = discover_tests(base_path)

    result = runner.run(suite)

    end_stamp = datetime.now().strftime("%Y-%m-%d at %H:%M")
    logging.info(separator)
    if result.wasSuccessful():
        logging.info("Completed unit tests successfully at " + end_stamp)
    else:
        logging.error("Completed unit tests with failures at " + end_stamp)
    logging.info(separator)

    end_logfile(log_file)
    return result

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Run Python tests")
    parser.add_argument('test', nargs='?', help="Specify the name of a test module to run (without .py)", default=None)
    args = parser.parse_args()

    results_directory = os.path.join(base_path, 'test_results')
    if not os.path.exists(results_directory):
        os.makedirs(results_directory)

    result = run_unit_tests(results_directory, args.test)

    summary_line = format_summary_line('PySubconvert', result)
    if result.wasSuccessful():
        print("Test Summary:")
        print(summary_line)
    else:
        logging.error(summary_line)
        print("*************************************************")
        print("*******     One or more tests failed!    ********")
        print("*************************************************")
        sys.exit(1)
