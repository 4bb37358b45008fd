"""Configuration management for PDF page search."""
import os
import logging
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Document Configuration
PDF_SOURCE = os.getenv("PDF_SOURCE")  # path or http(s) URL
PDF_TITLE = os.getenv("PDF_TITLE", "PDF Durchsuchen")
DOWNLOAD_TIMEOUT = float(os.getenv("DOWNLOAD_TIMEOUT", "30.0"))  # seconds

# Server Configuration
PORT = int(os.getenv("PORT", "8000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("LOG_FORMAT", "text")  # "text" or "json"

# CORS Configuration
CORS_ORIGINS = os.getenv(
    "CORS_ORIGINS", 
    "http://localhost:3000,http://localhost:5173"
).split(",")

# Snippet Configuration
SNIPPET_CONTEXT_BEFORE = int(os.getenv("SNIPPET_CONTEXT_BEFORE", "60"))  # chars before match
SNIPPET_CONTEXT_AFTER = int(os.getenv("SNIPPET_CONTEXT_AFTER", "150"))  # chars from match start

# Logging Configuration
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
