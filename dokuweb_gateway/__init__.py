"""
Doku@WEB Gateway - REST/SOAP client and thin JSON API for the Doku@WEB ticket system
"""

__version__ = "1.0.0"
