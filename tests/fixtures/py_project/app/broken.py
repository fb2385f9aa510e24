import json

from app.missing import nothing


def load(text):
    return json.loads(text) or nothing
