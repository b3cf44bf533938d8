"""codebrief - interview briefs for source-code projects.

codebrief downloads a repository archive (or takes an uploaded one), reduces
it to a bounded text corpus, asks a generative model for a structured brief,
and recovers a validated record from the reply:
- Fetch: GitHub zipball download or local archive
- Assemble: path filtering, binary sniffing, size ceilings
- Infer: ordered model tiers, first success wins
- Coerce: JSON object recovery with field defaults
"""

__version__ = "0.1.0"
__author__ = "codebrief Contributors"
