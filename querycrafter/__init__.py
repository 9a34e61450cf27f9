"""Theme, actions, SQL autocomplete, a modal editor and a language-server launcher."""

__version__ = "0.1.0"
__all__ = [
    "action",
    "autocomplete",
    "autocomplete_widget",
    "lsp_wrapper",
    "theme",
    "vim_editor",
]