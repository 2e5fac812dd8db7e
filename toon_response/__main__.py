from toon_response.cli import app

app(prog_name="toon-response")
