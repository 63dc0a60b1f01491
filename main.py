from dataclasses import dataclass

from rich.pretty import pprint

from argot import *

__prog__ = "main"


@dataclass
class Generate:
    length: UInt8 = option("-l, --length", 48)
    policy: str = option("-p, --policy", "")


@dataclass
class Options:
    help: bool = option("-h, -?, --help", False)
    debug: bool = option("-D, --debug", False)
    url: str = option("-U, --url", "")
    tags: list[str] = option("-t, --tag", factory=list)
    generate: Generate = command("gen, generate", Generate)


if __name__ == '__main__':
    options = Options()
    try:
        pprint(parse(options))
    except CommandException as fault:
        report(fault)
        raise SystemExit(2)
    pprint(options)
