from environ import Env

env = Env()

# -- tokenizer

# Which XML tokenizer drives the grammar: "defusedxml" (expat) or "lxml".
STACKMONSTER_TOKENIZER = env.str("STACKMONSTER_TOKENIZER", default="defusedxml")

# Whether the defusedxml tokenizer rejects documents with a <!DOCTYPE>.
# Entity expansion and external references are always refused.
STACKMONSTER_FORBID_DTD = env.bool("STACKMONSTER_FORBID_DTD", default=True)

# -- error reporting

# Whether errors at the end of the stream are raised.
# By default a truncated document still returns what the grammar collected so far.
STACKMONSTER_STRICT_FINISH = env.bool("STACKMONSTER_STRICT_FINISH", default=False)
