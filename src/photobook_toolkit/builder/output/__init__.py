"""
Module: builder.output

Purpose:
    LaTeX rendering, PDF compilation and PDF post-processing.

Key Functions:
    - render_page(): Write one page{NNN}/page.tex
    - render_book(): Write photobook.tex and its Makefile
    - compile_document(): Run pdflatex twice
    - remove_inner_covers(): Write the trimmed PDF

Dependencies:
    - fitz (PyMuPDF): PDF post-processing

Used By:
    - builder.controller: Pipeline orchestration
"""

from .compiler import CompileResult, compile_document, pdf_name_for
from .postprocess import ExternalToolFailure, remove_inner_covers, remove_pages
from .renderer import load_template, render_book, render_page

__all__ = [
    # Rendering
    "render_page",
    "render_book",
    "load_template",
    # Compilation
    "compile_document",
    "CompileResult",
    "pdf_name_for",
    # Post-processing
    "remove_pages",
    "remove_inner_covers",
    "ExternalToolFailure",
]
