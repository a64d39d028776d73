# leadcapture/__init__.py
"""
Demo-form submission pipeline: email verification, attribution enrichment
and HubSpot lead capture.

The web relay is served with the ``server`` extra installed::

    pip install -e ".[server]"
    uvicorn leadcapture.main:app --host 0.0.0.0 --port 8000
"""

__version__ = "1.0.0"
