"""
Terminal Resume

Portfolio site served as an interactive terminal, with resume content read
from GitHub and an AI assistant answering visitor questions.
"""

__version__ = "1.0.0"
