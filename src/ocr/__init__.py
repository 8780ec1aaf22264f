"""
OCR output adapters (input boundary only).

Recognition itself happens elsewhere; these helpers turn an engine's native
word output into `{text, bbox}` fragment records without correcting text.
"""

from .tesseract import fragments_from_tesseract_tsv, fragments_from_tesseract_words

__all__ = ["fragments_from_tesseract_tsv", "fragments_from_tesseract_words"]
