#!/usr/bin/env python3

"""
usage:  python3 ../pyechor/ [-h] [-n] [-V] TEXT [TEXT ...]
"""

import os
import subprocess
import sys


def main(argv):
    """
    Run "bin/echor.py"
    """

    # Find the colocated "bin/" dir

    file_dir = os.path.split(os.path.realpath(__file__))[0]
    bin_dir = os.path.join(file_dir, "bin")

    # Call Echor Py, and pass back its exit status

    bin_echor_py = os.path.join(bin_dir, "echor.py")
    ran = subprocess.run([sys.executable, bin_echor_py] + argv[1:])
    sys.exit(ran.returncode)


if __name__ == "__main__":
    main(sys.argv)
