"""
Helpers shared by the bookmark import models: logging, configuration,
HTML text handling and URL utilities.
"""
