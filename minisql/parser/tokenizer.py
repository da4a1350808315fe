"""
Tokenizer léxico: parte el texto del script en tokens de texto plano.

No reconoce palabras clave; eso lo decide el parser según el contexto.
"""

from typing import List

# Delimitadores que además se emiten como token de un carácter
DELIMITERS = frozenset(';\t(),* ')
# Cortan la palabra en curso pero no se emiten
LINE_BREAKS = frozenset('\n\r')

INDENTATION = frozenset(' \t')


def tokenize(text: str) -> List[str]:
    tokens = []
    word = []
    for character in text:
        if character in LINE_BREAKS:
            if word:
                tokens.append(''.join(word))
                word = []
        elif character in DELIMITERS:
            if word:
                tokens.append(''.join(word))
                word = []
            tokens.append(character)
        else:
            word.append(character)
    if word:
        tokens.append(''.join(word))
    return tokens


def is_indentation(token: str) -> bool:
    return token in INDENTATION
