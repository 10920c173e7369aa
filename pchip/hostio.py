#!/usr/bin/env python3

"""
Host I/O Functionality

Handles reading ROM binaries from the host filesystem, ready to be handed to
the CPU.  ROMs have no header or checksum, so there is nothing to validate here
beyond the file being readable.  Size limits are enforced when the ROM is
loaded into memory.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class Loader:
    def load_binary(self, filename):
        with open(filename, "rb") as f:
            return f.read()
