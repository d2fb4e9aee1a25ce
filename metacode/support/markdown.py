"""
Markdown is a fine container format for small tables of data, provided you only need the pipes.
"""

import re

ROW_BREAK = re.compile(r'\r?\n')
ALIGNMENT = re.compile(r':?-+:?')

def split_row(line:str) -> list:
	return [cell.strip() for cell in line.split('|')]

def is_alignment(cells:list) -> bool:
	""" The |---|:---:| row that real markdown wants under the header carries no data. """
	filled = [c for c in cells if c]
	return bool(filled) and all(ALIGNMENT.fullmatch(c) for c in filled)

def parse_table(md:str) -> list:
	"""
	The first line is the header; empty header cells are ignored.
	Every subsequent line becomes a dictionary from header cells to (trimmed) values.
	A line with too few cells gets empty strings for the missing ones.
	"""
	rows = [split_row(line) for line in ROW_BREAK.split(md.strip())]
	keys = rows.pop(0)
	table = []
	for row in rows:
		if is_alignment(row): continue
		table.append({key: (row[i] if i < len(row) else '') for i, key in enumerate(keys) if key})
	return table
