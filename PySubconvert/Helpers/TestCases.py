from collections.abc import Sequence
import os
import shutil
import tempfile
import unittest
from typing import Any

from PySubconvert.ConversionApplier import ConversionApplier
from PySubconvert.Helpers.Tests import log_input_expected_result, log_test_name
from PySubconvert.Options import Options
from PySubconvert.ScriptConverter import create_mapping_converter

# Simplified to traditional mappings used by the fake converter
test_mapping = {
    '汉': '漢',
    '语': '語',
    '们': '們',
    '这': '這',
    '说': '說',
    '话': '話',
    '个': '個',
    '门': '門',
    '开': '開',
    '车': '車',
    '东': '東',
    '时': '時',
    '间': '間',
    '对': '對',
    '里': '裡',
    '发': '發',
    '后': '後',
    '软件': '軟體',
}

class LoggedTestCase(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        super().setUpClass()
        log_test_name(f"{cls.__name__}")

    def setUp(self) -> None:
        super().setUp()
        log_test_name(self._testMethodName)

    def assertLoggedEqual(self, name : str, expected : Any, actual : Any, input_value : Any = None) -> None:
        log_input_expected_result(input_value if input_value is not None else name, expected, actual)
        self.assertEqual(expected, actual, f"{name} mismatch")

    def assertLoggedTrue(self, name : str, actual : Any, input_value : Any = None) -> None:
        log_input_expected_result(input_value if input_value is not None else name, True, actual)
        self.assertTrue(actual, f"{name} should be true")

    def assertLoggedFalse(self, name : str, actual : Any, input_value : Any = None) -> None:
        log_input_expected_result(input_value if input_value is not None else name, False, actual)
        self.assertFalse(actual, f"{name} should be false")

    def assertLoggedSequenceEqual(self, name : str, expected : Sequence, actual : Sequence, input_value : Any = None) -> None:
        log_input_expected_result(input_value if input_value is not None else name, expected, actual)
        self.assertSequenceEqual(expected, actual, f"{name} mismatch")

class ConversionTestCase(LoggedTestCase):
    """
    Test case with a deterministic converter and a temporary directory for files
    """
    def setUp(self) -> None:
        super().setUp()
        self.convert_fn = create_mapping_converter(test_mapping)
        self.applier = ConversionApplier(self.convert_fn)
        self.temp_dir = tempfile.mkdtemp(prefix="subconvert_test_")
        self.options = Options(log_directory=os.path.join(self.temp_dir, "logs"), typo_file=None)

    def tearDown(self) -> None:
        shutil.rmtree(self.temp_dir, ignore_errors=True)
        super().tearDown()

    def write_file(self, filename : str, content : str|bytes) -> str:
        path = os.path.join(self.temp_dir, filename)
        data = content.encode('utf-8') if isinstance(content, str) else content
        with open(path, 'wb') as f:
            f.write(data)
        return path

    def read_file(self, path : str) -> bytes:
        with open(path, 'rb') as f:
            return f.read()
