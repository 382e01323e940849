"""Pure pipeline types and algorithms: diff analysis, prompts, response parsing."""
