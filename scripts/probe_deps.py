"""
Purpose:
- Sanity-check critical library versions after upgrades.
- Import the exact modules we use and print versions so we can spot drift immediately.
"""

import sys
import fastapi
import uvicorn
import httpx
import pydantic
import PIL
import sentry_sdk
from pydantic_settings import BaseSettings

print("python", sys.version)
print("fastapi", fastapi.__version__)
print("uvicorn", uvicorn.__version__)
print("httpx", httpx.__version__)
print("pydantic", pydantic.__version__)
print("pillow", PIL.__version__)
print("sentry-sdk", sentry_sdk.VERSION)
print("pydantic-settings", BaseSettings.__module__.split(".")[0])  # presence check
print("OK")
