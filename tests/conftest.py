import defusedxml

from stackmonster import __version__, conf


def pytest_configure():
    print(
        f"Running stackmonster {__version__} with defusedxml {defusedxml.__version__},"
        f" tokenizer={conf.STACKMONSTER_TOKENIZER}"
    )
