from ask_bayes.cli import app

app(prog_name="ask-bayes")
