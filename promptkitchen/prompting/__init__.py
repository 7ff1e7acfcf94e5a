"""
Prompt enhancement instructions.

Maps the techniques selected in the browser into the system message that tells the
completion model how to rewrite (never answer) the user's prompt.
"""
