import time

from rich.pretty import pprint

from clapp import App

__prog__ = "demo"

app = App("demo", version="0.1.0", descr="clapp demonstration")
app.define_flag("--steps", "how many progress steps to show", "4")
app.define_flag("--verbose", "dump the routing table first")
app.add_alias("-v", "--verbose")


@app.handle("greet [full name]", "say hello to someone")
def greet(context):
    context.print("hello %s" % context.arg("full name"))


@app.handle(r"count n:^\d+$", "count up to n with a progress bar")
def count(context):
    if context.flag("verbose") == "1":
        pprint(app.router.routes)
    total = int(context.arg("n"))
    if not total:
        return context.fail("nothing to count", status=2)
    steps = int(context.flag("steps"))
    with context.progress(width=30, easing="ease-out") as bar:
        for step in range(1, steps + 1):
            bar.update(100 * step / steps)


@app.handle("wait", "spin for a second")
def wait(context):
    with context.spinner("waiting"):
        time.sleep(1)


if __name__ == '__main__':
    app.main()
