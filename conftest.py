"""Global pytest configuration."""

import os

# Blank provider credentials before any imports so no test reaches a real service
os.environ["OPENAI_API_KEY"] = ""
os.environ["STRIPE_SECRET_KEY"] = ""
