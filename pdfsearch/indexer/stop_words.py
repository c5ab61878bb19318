"""
Stop words excluded from document tags.

The corpus is mostly French, with English boilerplate common in
technical PDFs; both lists are lowercase and accent-preserving.
"""

FRENCH_STOP_WORDS = frozenset({
    "à", "afin", "ai", "aie", "aient", "aies", "ait", "alors", "as", "au",
    "aucun", "aucune", "aupres", "auprès", "auquel", "aura", "aurai",
    "auraient", "aurais", "aurait", "auras", "aurez", "auriez", "aurions",
    "aurons", "auront", "aussi", "autre", "autres", "aux", "auxquelles",
    "auxquels", "avaient", "avais", "avait", "avant", "avec", "avez",
    "aviez", "avions", "avoir", "avons", "ayant", "ayez", "ayons", "bien",
    "car", "ce", "ceci", "cela", "celle", "celles", "celui", "cependant",
    "ces", "cet", "cette", "ceux", "chacun", "chacune", "chaque", "chez",
    "ci", "comme", "comment", "dans", "de", "des", "donc", "dont", "du",
    "duquel", "dès", "elle", "elles", "en", "encore", "entre", "es", "est",
    "et", "étaient", "étais", "était", "étant", "été", "êtes", "étiez",
    "étions", "être", "eu", "eue", "eues", "eurent", "eus", "eusse",
    "eussent", "eut", "eux", "fait", "faire", "fais", "font", "furent",
    "fus", "fut", "ici", "il", "ils", "je", "jusqu", "jusque", "la", "là",
    "laquelle", "le", "lequel", "les", "lesquelles", "lesquels", "leur",
    "leurs", "lors", "lorsque", "lui", "ma", "mais", "me", "même", "mêmes",
    "mes", "moi", "moins", "mon", "ne", "ni", "nos", "notre", "nous", "on",
    "ont", "ou", "où", "par", "parce", "pas", "peu", "peut", "plus",
    "pour", "pourquoi", "puis", "qu", "quand", "que", "quel", "quelle",
    "quelles", "quels", "qui", "quoi", "sa", "sans", "se", "sera", "serai",
    "seraient", "serais", "serait", "seras", "serez", "seriez", "serions",
    "serons", "seront", "ses", "si", "sien", "sienne", "soi", "soient",
    "sois", "soit", "sommes", "son", "sont", "sous", "soyez", "soyons",
    "suis", "sur", "ta", "tandis", "te", "tes", "toi", "ton", "tous",
    "tout", "toute", "toutes", "très", "tu", "un", "une", "unes", "uns",
    "vers", "voici", "voilà", "vos", "votre", "vous", "vu", "ça",
})

ENGLISH_STOP_WORDS = frozenset({
    "about", "above", "after", "again", "against", "all", "and", "any",
    "are", "because", "been", "before", "being", "below", "between",
    "both", "but", "can", "could", "did", "does", "doing", "down",
    "during", "each", "few", "for", "from", "further", "had", "has",
    "have", "having", "her", "here", "hers", "herself", "him", "himself",
    "his", "how", "into", "its", "itself", "just", "more", "most", "myself",
    "nor", "not", "now", "off", "once", "only", "other", "our", "ours",
    "ourselves", "out", "over", "own", "same", "she", "should", "some",
    "such", "than", "that", "the", "their", "theirs", "them", "themselves",
    "then", "there", "these", "they", "this", "those", "through", "too",
    "under", "until", "very", "was", "were", "what", "when", "where",
    "which", "while", "who", "whom", "why", "will", "with", "would", "you",
    "your", "yours", "yourself", "yourselves",
})

DEFAULT_STOP_WORDS = FRENCH_STOP_WORDS | ENGLISH_STOP_WORDS
