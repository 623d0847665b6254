"""xltemplate - Render .xlsx templates against structured data.

Layouts are designed in a spreadsheet editor with {{ }} placeholders,
{{ range items }} ... {{ end }} blocks and list rows, then rendered by
a backend process.
"""

from xltemplate.config import RenderOptions
from xltemplate.errors import XLTError
from xltemplate.report import Xlst, render_template

__version__ = "0.1.0"
__all__ = ["__version__", "Xlst", "RenderOptions", "XLTError", "render_template"]
