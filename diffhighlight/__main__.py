from diffhighlight.cli import app

if __name__ == "__main__":
    app(prog_name="diff-highlight")
