"""
TARIFF RAIL - Serverless API
Function-style deployment of the calculate-bill service.
"""

import os
import sys

sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "src"))

from mangum import Mangum

from api.server import app

# Serverless handler
handler = Mangum(app, lifespan="auto")
