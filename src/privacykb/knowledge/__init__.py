"""Knowledge base lookups and the actions built on them."""
