"""
HTTP surface for the agent's capabilities
"""

import asyncio
import json
import logging

from aiohttp import web

from .capabilities import Agent
from .errors import CapabilityValidationError, UnknownCapabilityError

logger = logging.getLogger('token_agent')


def create_app(agent: Agent) -> web.Application:
    """aiohttp application exposing GET /capabilities and POST /capabilities/{name}"""

    async def list_capabilities(request):
        return web.json_response(agent.describe())

    async def run_capability(request):
        name = request.match_info['name']
        try:
            body = await request.json()
        except json.JSONDecodeError:
            return web.json_response({'error': 'Request body must be JSON'}, status=400)

        if not isinstance(body, dict):
            return web.json_response({'error': 'Request body must be a JSON object'}, status=400)
        args = body.get('args', body)

        try:
            result = await agent.invoke(name, args)
        except UnknownCapabilityError as e:
            return web.json_response({'error': str(e)}, status=404)
        except CapabilityValidationError as e:
            logger.warning(f"Rejected {name} call: {e.errors}")
            return web.json_response(
                {'error': 'Invalid arguments', 'details': e.errors},
                status=400,
                dumps=lambda obj: json.dumps(obj, default=str),
            )
        except Exception as e:
            logger.error(f"Capability {name} crashed: {e}", exc_info=True)
            return web.json_response({'error': str(e)}, status=500)

        return web.Response(text=result, status=200)

    app = web.Application()
    app.router.add_get('/capabilities', list_capabilities)
    app.router.add_post('/capabilities/{name}', run_capability)
    return app


async def serve(agent: Agent, host: str, port: int) -> None:
    """Run the HTTP server until cancelled"""
    runner = web.AppRunner(create_app(agent))
    await runner.setup()
    site = web.TCPSite(runner, host, port)
    await site.start()

    print(f"✅ Agent server running on {host}:{port}")
    print(f"📌 Capabilities: {', '.join(agent.capabilities)}")

    try:
        while True:
            await asyncio.sleep(3600)
    finally:
        await runner.cleanup()
