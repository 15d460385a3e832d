import asyncio
from rich.console import Console
from rich.table import Table

from .config import APP
from .dispatch import ModelDispatcher
from .errors import ConfigurationError, DispatchError, user_message
from .logsetup import setup_logging
from .memory import Memory
from .models import AI_MODELS
from .orchestrator import Orchestrator
from .prompts import language_name
from .schema import MODES
from .websearch import WebSearch

HELP = """
Type a message to chat.
/mode <cyber|normal|coder|creative|research> → switch persona
/model <id> → switch model      /models → list models
/lang <code> → reply language   /uncensored → toggle uncensored mode
/search → toggle web search
/code <language> <description> → generate code
/research <topic> → research report
/clear → forget the conversation
/exit → quit
"""


def models_table(current: str) -> Table:
    table = Table(title="Models")
    for col in ("id", "name", "provider", "category", "context"):
        table.add_column(col)
    for m in AI_MODELS:
        mark = "* " if m.id == current else ""
        table.add_row(mark + m.id, m.name, m.provider, m.category, f"{m.max_tokens:,}")
    return table


async def main():
    setup_logging()
    cons = Console()
    cons.print("🤖 CyberAI is ready!\n" + HELP)
    dispatcher = ModelDispatcher(cfg=APP, search=WebSearch(APP.search))
    mem = Memory()
    orch = Orchestrator(mem, dispatcher)
    opts = dispatcher.default_options()

    while True:
        try:
            q = input(f"\n[{opts.mode}|{dispatcher.current_model.id}] You> ").strip()
        except EOFError:
            break
        if not q:
            continue
        if q == "/exit":
            break

        cmd, _, arg = q.partition(" ")
        arg = arg.strip()
        try:
            if cmd == "/mode":
                if arg in MODES:
                    opts.mode = arg
                else:
                    cons.print(f"[yellow]Unknown mode[/yellow] {arg!r}; choose from {', '.join(MODES)}")
            elif cmd == "/model":
                if not dispatcher.set_model(arg):
                    cons.print(f"[yellow]Unknown model[/yellow] {arg!r}")
            elif cmd == "/models":
                cons.print(models_table(dispatcher.current_model.id))
            elif cmd == "/lang":
                opts.language = arg or "en"
                cons.print(f"Replying in {language_name(opts.language) if opts.language != 'en' else 'English'}")
            elif cmd == "/uncensored":
                opts.uncensored = not opts.uncensored
                cons.print(f"Uncensored mode: {'on' if opts.uncensored else 'off'}")
            elif cmd == "/search":
                opts.web_search = not opts.web_search
                cons.print(f"Web search: {'on' if opts.web_search else 'off'}")
            elif cmd == "/clear":
                mem.clear()
                cons.print("Conversation cleared.")
            elif cmd == "/code":
                lang, _, desc = arg.partition(" ")
                if not desc:
                    cons.print("Usage: /code <language> <description>")
                    continue
                cons.print(await orch.generate_code(desc, lang))
            elif cmd == "/research":
                report = await orch.perform_research(arg)
                cons.print(report.summary)
                for p in report.key_points:
                    cons.print(f"  • {p}")
                if report.recommendations:
                    cons.print("[bold]Recommendations[/bold]")
                    for r in report.recommendations:
                        cons.print(f"  • {r}")
                for s in report.sources:
                    cons.print(f"[dim]{s.source}: {s.url}[/dim]")
            else:
                res = await orch.step(q, opts)
                cons.print(res.final_text)
                for s in res.search_results:
                    cons.print(f"[dim]{s.source}: {s.url}[/dim]")
                if res.errors:
                    cons.print(f"[red]Errors:[/red] {res.errors}")
        except DispatchError as e:
            cons.print(f"[red]{user_message(e)}[/red]")
        except ConfigurationError as e:
            cons.print(f"[red]{e}[/red]")
            break


def run():
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass

if __name__ == "__main__":
    run()
