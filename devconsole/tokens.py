"""
Input tokenization and arity reconciliation.

tokenize(raw)
- splits one input line on single spaces; token 0 is the command-name candidate,
  the rest are raw argument strings.
- a double-quoted region ("say hi there") is rebuilt into one argument with its
  inner spacing preserved; an unterminated quote absorbs the rest of the line.
- a final token that opens a quote it never closes is kept as typed, quote
  included: `say "hello` passes '"hello'.
- only single-space separators are understood: two spaces produce an empty token,
  exactly as typed.

reconcile(tokens, count)
- when a command declares fewer parameters than were supplied, the surplus words
  are folded into the last parameter, so `print hello world` passes "hello world"
  without requiring quotes.

Quick example:
    >>> tokenize('bind UpArrow "say hi there"')
    ['bind', 'UpArrow', 'say hi there']
    >>> reconcile(['print', 'hello', 'world'], 1)
    ['print', 'hello world']
"""

QUOTE = '"'


def tokenize(raw, /):
    """
    Split a raw input line into [name, *arguments], honoring one quoted region at a time.

    Rules (scanning arguments left to right)
    - not building:
      • a token opening with a quote, that is not the final token and does not close
        its own quote, starts a quoted region (a lone '"' also starts one);
      • a token of two or more characters enclosed in quotes is emitted unquoted;
      • anything else, including a final token that opens a quote without closing
        it, is emitted verbatim.
    - building: append " " + token (closing quote stripped); the region ends when
      the token closes the quote or when the input runs out.
    """
    if not isinstance(raw, str):
        raise TypeError("tokenize() argument must be a string")

    split = raw.split(" ")
    if len(split) <= 1:
        return split

    tokens = [split[0]]
    building = False
    buffer = ""
    last = len(split) - 1

    for index, token in enumerate(split[1:], start=1):
        if building:
            buffer += " " + token.rstrip(QUOTE)
            if token.endswith(QUOTE) or index == last:
                building = False
                tokens.append(buffer)
            continue

        if token.startswith(QUOTE) and len(token) > 1 and token.endswith(QUOTE):
            tokens.append(token.strip(QUOTE))
        elif token.startswith(QUOTE) and index != last:
            building = True
            buffer = token.lstrip(QUOTE)
        else:
            tokens.append(token)

    return tokens


def reconcile(tokens, count, /):
    """
    Fold surplus argument tokens into the last of `count` parameters.

    - fewer or exactly `count` arguments: returned unchanged (the dispatcher reports
      missing ones as an arity error).
    - `count == 0`: only the name is kept; a command without parameters ignores
      trailing words (`quit now` runs `quit`).
    - otherwise: [name, *arguments[:count - 1], " ".join(arguments[count - 1:])].

    Reconciling an already reconciled list returns it unchanged.
    """
    if count < 0:
        raise ValueError("reconcile() count must be a non-negative integer")
    if len(tokens) - 1 <= count:
        return list(tokens)
    if count == 0:
        return [tokens[0]]
    return [*tokens[:count], " ".join(tokens[count:])]


__all__ = (
    "tokenize",
    "reconcile",
)
