#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Build a printed street index from rendered map label boxes.
"""

# local repo modules
import street_index as sidx
import street_index.cli


if __name__ == "__main__":
	sidx.cli.main()
