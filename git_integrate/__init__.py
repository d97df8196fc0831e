"""git-integrate: merge every open pull request carrying a label into one branch."""

__version__ = "0.1.0"
