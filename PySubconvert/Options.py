from __future__ import annotations
from collections.abc import Mapping
import logging
import os

from PySubconvert.SettingsType import SettingType, SettingsType

config_dir = os.getenv('CW_CONFIG_DIR') or os.path.join(os.path.expanduser('~'), '.cw-subconvert')

default_settings : dict[str, SettingType] = {
    'phrase_mode': os.getenv('CW_PHRASE_MODE', "False") == "True",
    'conversion': None,
    'verbosity': 1,
    'log_directory': "./logs",
    'log_file_prefix': "cw",
    'log_file_date_format': "%Y-%m-%d",
    'log_level': os.getenv('CW_LOG_LEVEL', "INFO"),
    'log_max_size': "10MB",
    'log_backup_count': 5,
    'fix_terminator': True,
    'full_preview': False,
    'typo_file': os.getenv('CW_TYPO_FILE'),
    'max_consistency_terms': 5000,
    'output_tag': "zh-Hant",
    'compare_column_width': 40,
}

class Options(SettingsType):
    """
    Settings for a conversion run, with defaults for anything not specified
    """
    def __init__(self, settings : Mapping[str, SettingType]|None = None, **kwargs : SettingType):
        super().__init__(default_settings)

        if settings is not None:
            self.update(settings)

        if kwargs:
            self.update(kwargs)

    @property
    def phrase_mode(self) -> bool:
        return self.get_bool('phrase_mode')

    @property
    def conversion(self) -> str:
        """ OpenCC configuration name, derived from phrase mode unless set explicitly """
        return self.get_str('conversion') or ('s2twp' if self.phrase_mode else 's2t')

    @property
    def verbosity(self) -> int:
        return self.get_int('verbosity') or 0

    @property
    def log_directory(self) -> str:
        return self.get_str('log_directory') or "./logs"

    @property
    def log_level(self) -> str:
        return (self.get_str('log_level') or "INFO").upper()

    @property
    def log_max_size_mb(self) -> float:
        return self.get_size_mb('log_max_size') or 10.0

    @property
    def fix_terminator(self) -> bool:
        return self.get_bool('fix_terminator')

    @property
    def typo_file(self) -> str|None:
        return self.get_str('typo_file')

    @property
    def max_consistency_terms(self) -> int|None:
        return self.get_int('max_consistency_terms')

    def GetLogFilename(self, input_path : str, date_string : str) -> str:
        """
        Build the per-file audit log name, e.g. cw_2024-05-01_movie.log
        """
        prefix = self.get_str('log_file_prefix') or "cw"
        stem = os.path.splitext(os.path.basename(input_path))[0] or "log"
        return f"{prefix}_{date_string}_{stem}.log"

def LoadSettingsFile(path : str) -> SettingsType:
    """
    Read a configuration file of `key = value` lines.

    Anything after a # is a comment, surrounding quotes are stripped from values
    and lines without an = are ignored. A missing file yields empty settings.
    """
    settings = SettingsType()
    if not os.path.exists(path):
        logging.debug(f"No configuration file at {path}")
        return settings

    with open(path, 'r', encoding='utf-8-sig') as config_file:
        for line in config_file:
            clean = line.split('#', 1)[0].strip()
            key, separator, value = clean.partition('=')
            if not separator or not key.strip():
                continue

            settings[key.strip()] = value.strip().strip('"')

    logging.info(f"Loaded {len(settings)} settings from {path}")
    return settings
