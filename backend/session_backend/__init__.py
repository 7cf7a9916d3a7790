"""
Classroom session backend: LiveKit room credentials, AI helpers and live quizzes.
"""
