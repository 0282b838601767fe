"""
Module: builder.output.compiler

Purpose:
    Compile the top-level LaTeX document to PDF with pdflatex. Two passes
    are run so that cross-references settle. Compilation problems are
    logged and reported, never raised: the LaTeX sources stay usable with
    the generated Makefile.

Key Functions:
    - compile_document(): Run pdflatex twice

Key Classes:
    - CompileResult: Outcome of a compilation

Dependencies:
    - subprocess (std)

Used By:
    - builder.controller: When PDF output is requested
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

PDFLATEX = "pdflatex"
PASSES = 2


@dataclass(frozen=True)
class CompileResult:
    """
    Outcome of compile_document().

    Attributes:
        pdf_path: Expected PDF next to the .tex file
        success: Whether every pass exited with status 0
        error: What went wrong, if anything
    """

    pdf_path: Path
    success: bool
    error: Optional[str] = None


def pdf_name_for(tex_name: str) -> str:
    """
    Name of the PDF pdflatex produces for a source file.

    Example:
        >>> pdf_name_for("photobook.tex")
        'photobook.pdf'
    """
    if tex_name.endswith(".tex"):
        return tex_name[: -len(".tex")] + ".pdf"
    return f"{tex_name}.pdf"


def compile_document(out_dir: Path, tex_name: str) -> CompileResult:
    """
    Run pdflatex twice on a document.

    Args:
        out_dir: Folder holding the document (pdflatex working directory)
        tex_name: Document file name, relative to out_dir

    Returns:
        CompileResult; success is False if pdflatex is missing or a pass
        exits with a nonzero status
    """
    pdf_path = out_dir / pdf_name_for(tex_name)
    command = [PDFLATEX, "-interaction=nonstopmode", tex_name]
    error = None

    for n in range(1, PASSES + 1):
        logger.info(f"pdflatex pass {n} on {out_dir / tex_name}")
        try:
            completed = subprocess.run(
                command,
                cwd=out_dir,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                check=False,
            )
        except FileNotFoundError:
            logger.error("Could not launch pdflatex, is it correctly installed?")
            return CompileResult(pdf_path=pdf_path, success=False, error="pdflatex not found")
        except OSError as e:
            logger.error(f"Could not launch pdflatex: {e}")
            return CompileResult(pdf_path=pdf_path, success=False, error=str(e))

        if completed.returncode != 0:
            logger.error(f"LaTeX compilation error (pass {n}, exit status {completed.returncode})")
            error = f"pdflatex exited with status {completed.returncode}"

    if error is None:
        logger.info(f"Compiled {pdf_path}")
    return CompileResult(pdf_path=pdf_path, success=error is None, error=error)
