#!/usr/bin/env python3

"""
Emulation Errors

Every fault the interpreter can raise while loading or running a ROM derives
from EmulationError, so a host only needs to catch the one type to report the
problem and stop.  The more specific types live beside the component that
raises them.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class EmulationError(Exception):
    pass
