"""
AI layer - LLM adapter plus the generation orchestrator, grader and sentence
generator built on the outline engines.
"""
