from procfinder.cli import app

app(prog_name="procfinder")
