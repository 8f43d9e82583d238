#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Build printable sudoku puzzle books from pre-generated puzzles.
"""

import sudoku_book_press.cli


if __name__ == "__main__":
	sudoku_book_press.cli.main()
