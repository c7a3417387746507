"""config_loading.py"""

from declarg import run
from declarg.config import load_spec

spec = load_spec("declarg.yaml")

if __name__ == "__main__":
    print(run(spec))
