#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Version information for ParallelWrap
"""

__version__ = "0.2.0"
__version_info__ = tuple(int(x) for x in __version__.split("."))

# Version history
VERSION_HISTORY = [
    "0.2.0 - Results harvesting, YAML config and server checks",
    "0.1.0 - Initial release with command line rendering for GNU parallel",
]
