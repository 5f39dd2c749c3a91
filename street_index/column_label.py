"""
Column labels for the reference grid (A, B, ..., Z, AA, AB, ...).
"""

# Standard Library
import string


ALPHABET = string.ascii_uppercase
RADIX = len(ALPHABET)


#============================================
def column_label(index: int) -> str:
	"""
	Convert a zero-based column index into a bijective base-26 label.

	0 is "A", 25 is "Z", 26 is "AA" and 225 is "HR". There is no zero
	digit, so every label is unique and longer labels always belong to
	larger indices.

	Args:
		index: Zero-based column index.

	Returns:
		Column label string.
	"""
	if index < 0:
		raise ValueError(f"column index must be >= 0, got {index}")
	letters = [ALPHABET[index % RADIX]]
	remaining = index // RADIX
	while remaining > 0:
		remaining -= 1
		letters.append(ALPHABET[remaining % RADIX])
		remaining //= RADIX
	letters.reverse()
	return "".join(letters)


#============================================
def column_index(label: str) -> int:
	"""
	Convert a column label back into its zero-based index.

	Args:
		label: Column label like "AB".

	Returns:
		Zero-based column index.
	"""
	if not label or any(char not in ALPHABET for char in label):
		raise ValueError(f"invalid column label: {label!r}")
	value = 0
	for char in label:
		value = value * RADIX + ALPHABET.index(char) + 1
	return value - 1


#============================================
def column_sort_key(label: str) -> tuple[int, str]:
	"""
	Sort key that puts shorter labels first, so "Z" sorts before "AA".
	"""
	return (len(label), label)
