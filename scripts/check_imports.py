import sys
import importlib.util

def check_required_imports(modules: list[str]) -> None:
    """Check if required modules are available and exit with helpful message if not"""
    missing_modules = [ module_name for module_name in modules if importlib.util.find_spec(module_name) is None ]

    if missing_modules:
        print(f"Error: Required modules not found: {', '.join(missing_modules)}")
        print("Please install the package with `pip install .` from the repository root")
        sys.exit(1)
