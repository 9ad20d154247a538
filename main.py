from rich.pretty import pprint

from argkit import *


if __name__ == '__main__':
    pprint(parse())
