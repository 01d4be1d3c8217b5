# File: medialib/core/database/base.py

from sqlalchemy.orm import declarative_base

# The shared registry. Catalog entries, their meta rows and scan notices all inherit from this.
Base = declarative_base()
