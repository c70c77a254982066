from __future__ import annotations

import subprocess
import sys


def main():
    subprocess.run(
        [sys.executable, "-m", "zee.entrypoints.cli", "Write a haiku and translate it into Spanish"],
        check=True,
    )


if __name__ == "__main__":
    main()
