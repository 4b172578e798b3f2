import sys
import os

_tests_dir = os.path.dirname(os.path.abspath(__file__))
_src_dir = os.path.abspath(os.path.join(_tests_dir, '..'))

# Import the package from the source tree when it is not installed.
if _src_dir not in sys.path:
    sys.path.insert(0, _src_dir)
