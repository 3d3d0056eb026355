import asyncio


class TerminalPrompt:
    async def ask(self, question: str) -> str | None:
        try:
            return await asyncio.to_thread(input, f"{question}: ")
        except EOFError:
            return None
