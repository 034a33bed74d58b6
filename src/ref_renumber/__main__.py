from ref_renumber.cli import app

app(prog_name="ref-renumber")
