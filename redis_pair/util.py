import sys
from .xprint import xprint

_TRUTHY = ('yes', 'true', 'y', '1', 'on')

_ANSWERS = {'yes': True, 'y': True, 'no': False, 'n': False}
_CHOICES = {True: '[Y/n]', False: '[y/N]', None: '[y/n]'}


def is_truthy(value):
    if value is None:
        return False
    return str(value).strip().lower() in _TRUTHY


def query_yes_no(question, default=None):
    while True:
        xprint(f"> {question} {_CHOICES[default]} ", file=sys.stderr, end='')
        answer = input().strip().lower()
        if not answer and default is not None:
            return default
        if answer in _ANSWERS:
            return _ANSWERS[answer]
        xprint("> Answer yes or no.", file=sys.stderr)
