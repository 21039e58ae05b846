RULES_TEXT = """Code Wordle

You will be given a random code snippet.
Initially, all characters are hidden.
All you can see is the shape of the code snippet.

Your goal is to guess out the code snippet.
To achieve this, you can enter a substring of the code snippet length >= 3.
Then the matching characters will be revealed.

There's also fuzzy match
If there's a substring of the code snippet that only differs by 1 character
The substring will change to fuzzy match characters!

There are 3 game modes:
Limited Guesses: Use as few guesses as possible. To reduce the difficulty, one character is revealed every 5 guesses.
Time Attack: Use as little time as possible. To reduce the difficulty, one character is revealed every 10 seconds.
Point: The score is calculated from the revealed characters and the guesses used. \
Fuzzy match and problem ID showing are disabled initially. \
You can enable them, but the score will be reduced.
"""


def get_rules() -> str:
    """Return the rules text."""
    return RULES_TEXT
