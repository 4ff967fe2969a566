from smartguard.cli import app

app(prog_name="smartguard")
