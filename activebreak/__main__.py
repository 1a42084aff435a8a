import asyncio

from activebreak.main import main

asyncio.run(main())
