"""Allow ``python -m greetctl``."""

from greetctl.cli import main

main()
