import os
import logging
import logging.handlers

from argparse import ArgumentParser, Namespace
from dataclasses import dataclass

from PySubconvert import init_options
from PySubconvert.Helpers import GetDataPath
from PySubconvert.Options import LoadSettingsFile, Options, config_dir

default_config_file = "cw.cfg"

@dataclass
class LoggerOptions():
    file_handler: logging.Handler|None
    log_path: str

def InitLogger(logfilename: str, debug: bool = False, options: Options|None = None) -> LoggerOptions:
    """ Initialise the logger with a rotating file handler and return the path to the log file """
    options = options or Options()
    log_directory = options.log_directory
    log_path = os.path.join(log_directory, f"{logfilename}.log")
    file_handler = None

    if debug:
        logging_level = logging.DEBUG
    else:
        logging_level = getattr(logging, options.log_level, logging.INFO)

    logging.basicConfig(format='%(levelname)s: %(message)s', encoding='utf-8', level=logging_level)

    if debug:
        logging.debug("Debug logging enabled")

    # Create file handler with the same logging level
    try:
        os.makedirs(log_directory, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_path,
            encoding='utf-8',
            maxBytes=int(options.log_max_size_mb * 1024 * 1024),
            backupCount=options.get_int('log_backup_count') or 0
        )
        file_handler.setLevel(logging_level)
        file_handler.setFormatter(logging.Formatter('%(asctime)s %(levelname)s: %(message)s'))
        logging.getLogger('').addHandler(file_handler)
    except OSError as e:
        logging.warning(f"Unable to create log file at {log_path}: {e}")

    return LoggerOptions(file_handler=file_handler, log_path=log_path)

def CreateArgParser(description : str) -> ArgumentParser:
    """
    Create the command line parser for the conversion script
    """
    parser = ArgumentParser(description=description)
    parser.add_argument('files', nargs='*', help="Subtitle files to convert (.srt, .ass, .ssa)")
    parser.add_argument('-p', '--phrase', action='store_true', default=None, help="Use Taiwan phrase conversion rather than character conversion")
    parser.add_argument('-a', '--compare', nargs=2, metavar=('REFERENCE', 'CANDIDATE'), default=None, help="Compare a converted file with the expected conversion of its source")
    parser.add_argument('--diagnose', action='store_true', help="Run diagnostics on the files without converting them")
    parser.add_argument('--stdin', action='store_true', help="Convert standard input line by line and write to standard output")
    parser.add_argument('--typos', type=str, default=None, help="Path to a JSON typo ruleset")
    parser.add_argument('--config', type=str, default=None, help=f"Path to a configuration file (default {default_config_file} in the config directory)")
    parser.add_argument('--conversion', type=str, default=None, help="OpenCC conversion to use, e.g. s2t, s2tw, s2twp")
    parser.add_argument('--output-dir', type=str, default=None, help="Directory to write converted files to (default: beside the input)")
    parser.add_argument('--full-preview', action='store_true', default=None, help="Preview every converted line, not only the changed ones")
    parser.add_argument('--no-fix-terminator', dest='fix_terminator', action='store_false', default=None, help="Do not append a missing final blank line to the output")
    parser.add_argument('--debug', action='store_true', help="Run with DEBUG log level")
    return parser

def CreateOptions(args: Namespace, **kwargs) -> Options:
    """ Create options from the configuration file overlaid with command line arguments """
    config_path = args.config or os.path.join(config_dir, default_config_file)
    if args.config and not os.path.exists(config_path):
        logging.warning(f"Configuration file {config_path} not found, using defaults")

    settings = LoadSettingsFile(config_path)

    settings.update({
        'phrase_mode': args.phrase,
        'conversion': args.conversion,
        'typo_file': args.typos,
        'full_preview': args.full_preview,
        'fix_terminator': args.fix_terminator,
    })

    # Adding optional new keys from kwargs
    settings.update(kwargs)

    options = init_options(**settings)
    if not options.typo_file:
        options['typo_file'] = GetDataPath("typos.json")

    return options
