"""Minimal console front end for the chat controller."""

import asyncio

from chat_core.api.service import get_default_controller


def render(history, pending):
    last = history[-1] if history else None
    if last is not None and not last.is_user:
        print("Assistant:", last.content)
    if pending:
        print("Thinking...")


async def main():
    controller = get_default_controller(render=render)
    while True:
        try:
            line = await asyncio.to_thread(input, "You: ")
        except EOFError:
            break
        if controller.submit(line):
            await controller.wait_idle()


if __name__ == "__main__":
    asyncio.run(main())
