"""CLI entrypoint: Typer app definition and command registration"""

import typer

from boardpost.cli.commands import init_cmd, post_cmd, render_cmd, rules_cmd, thread_cmd


app = typer.Typer(name="boardpost", no_args_is_help=True, help="Imageboard post markup parser and store")

app.command(name="init")(init_cmd)
app.command(name="thread")(thread_cmd)
app.command(name="post")(post_cmd)
app.command(name="render")(render_cmd)
app.command(name="rules")(rules_cmd)
