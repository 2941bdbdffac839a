import os

def GetOutputPath(input_path : str, tag : str|None = None, output_dir : str|None = None) -> str:
    """
    Build the output path for a converted file, e.g. movie.srt -> movie.zh-Hant.srt
    """
    directory, filename = os.path.split(input_path)
    stem, extension = os.path.splitext(filename)
    if tag and not stem.endswith(f".{tag}"):
        stem = f"{stem}.{tag}"

    return os.path.join(output_dir or directory, f"{stem}{extension}")

def GetLogPath(log_directory : str, log_filename : str) -> str:
    return os.path.abspath(os.path.join(log_directory, log_filename))

def GetDataPath(filename : str) -> str:
    """
    Path to a file shipped in the package data directory, e.g. the sample typo ruleset
    """
    return os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'data', filename)
