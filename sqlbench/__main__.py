import sys

from sqlbench.run_benchmark import main

if __name__ == "__main__":
    sys.exit(main())
