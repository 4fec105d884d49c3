"""
Services module for link management logic.

This module contains the repository and the view controllers, keeping
them separate from the HTTP client and from any presentation layer.
"""
