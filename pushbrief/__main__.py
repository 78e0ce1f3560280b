from pushbrief.cli import app

app(prog_name="pushbrief")
