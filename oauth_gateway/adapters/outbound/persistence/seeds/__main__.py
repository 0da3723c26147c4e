# oauth_gateway/adapters/outbound/persistence/seeds/__main__.py

import asyncio
import logging

from oauth_gateway.adapters.outbound.persistence.seeds import _main

# python -m oauth_gateway.adapters.outbound.persistence.seeds
logging.basicConfig(level=logging.INFO)
asyncio.run(_main())
