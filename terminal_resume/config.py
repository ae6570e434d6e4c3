"""
Terminal Resume Configuration

Handles environment configuration for the content source, the assistant
and the speech proxy.
"""

import os

from dotenv import load_dotenv

# Load .env before any constant below is read
load_dotenv()


# Server configuration
HOST = os.getenv("TERMINAL_HOST", "127.0.0.1")
PORT = int(os.getenv("TERMINAL_PORT", "8000"))

# Timeout (seconds) for every outbound HTTP call
HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "30"))

# Identifies this service to GitHub and friends
CLIENT_USER_AGENT = "terminal-resume/1.0"

# GitHub content source
# Markdown files live under {CONTENT_ROOT}/{Directory}/ in this repository
GITHUB_API_BASE = os.getenv("GITHUB_API_BASE", "https://api.github.com")
GITHUB_OWNER = os.getenv("GITHUB_OWNER", "joshua-lossner")
GITHUB_REPO = os.getenv("GITHUB_REPO", "lossner.personal")
CONTENT_ROOT = os.getenv("CONTENT_ROOT", "content")

# Personal Access Token for the Contents API
# Optional for public repos; a private repo without it falls back to static data
GITHUB_TOKEN = os.getenv("GITHUB_TOKEN", "")

# Assistant ("Alex")
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "")
OPENAI_PROJECT_ID = os.getenv("OPENAI_PROJECT_ID", "")
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o")

# Text-to-speech
ELEVENLABS_API_KEY = os.getenv("ELEVENLABS_API_KEY", "")
ELEVENLABS_VOICE_ID = os.getenv("ELEVENLABS_VOICE_ID", "pNInz6obpgDQGcFmaJgB")

# Contact details shown by /contact, /github and /linkedin
GITHUB_PROFILE_URL = os.getenv("GITHUB_PROFILE_URL", "https://github.com/joshua-lossner")
LINKEDIN_URL = os.getenv("LINKEDIN_URL", "https://linkedin.com/in/joshua-lossner")
CONTACT_EMAIL = os.getenv("CONTACT_EMAIL", "joshua@lossner.tech")
CONTACT_LOCATION = os.getenv("CONTACT_LOCATION", "San Francisco, CA")


def content_source() -> str:
    """Human readable name of the configured content repository."""
    return f"{GITHUB_OWNER}/{GITHUB_REPO}/{CONTENT_ROOT}"
