from chunkbuild.cli import app

app(prog_name="chunkbuild")
