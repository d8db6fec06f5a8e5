# Known misspellings and informal spellings mapped to their corrected form.
# Keys are matched case-insensitively on whole-word boundaries; multi-word
# keys match any whitespace between their words.
DEFAULT_CORRECTIONS = {
    "teh": "the",
    "adn": "and",
    "recieve": "receive",
    "seperate": "separate",
    "definately": "definitely",
    "occured": "occurred",
    "existance": "existence",
    "beleive": "believe",
    "acheive": "achieve",
    "goverment": "government",
    "enviroment": "environment",
    "managment": "management",
    "completly": "completely",
    "realy": "really",
    "finaly": "finally",
    "dont": "don't",
    "cant": "can't",
    "wont": "won't",
    "their is": "there is",
    "there are alot": "there are a lot",
    "alot": "a lot",
}
