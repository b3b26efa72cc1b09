"""
JSON response contracts for content generation.

These strings are embedded in the prompts sent to the language model. The
provider in api.py validates responses against the same shapes and treats
anything else as a failed fetch.
"""

LEVEL_WORDS_SCHEMA = """
Return ONLY a JSON object with this structure:
{
  "words": [
    {
      "original": "word in the source language",
      "translation": "word in the target language",
      "pronunciation": "pronunciation guide for the target word, if applicable",
      "examples": ["example sentence in the target language", "its translation in the source language"]
    }
  ]
}
Rules:
- Exactly 10 entries in "words".
- The first example sentence MUST contain the target-language word exactly as written in "translation".
- No two entries may share the same "translation".
"""

TRANSLATION_SCHEMA = """
Return ONLY a JSON object with this structure:
{
  "translation": "translated word",
  "pronunciation": "pronunciation guide if applicable",
  "examples": ["example sentence in the target language", "its translation in the source language"],
  "context": "brief context or usage notes"
}
"""

QUIZ_SCHEMA = """
Return ONLY a JSON object with this structure:
{
  "questions": [
    {
      "type": "multiple-choice",
      "question": "What is the [target language] translation of '[source word]'?",
      "options": ["correct answer", "wrong option 1", "wrong option 2", "wrong option 3"],
      "correctAnswer": "correct answer"
    },
    {
      "type": "fill-blank",
      "question": "Complete the sentence: '[sentence with _____ for the missing word]'",
      "correctAnswer": "word that goes in the blank"
    }
  ]
}
Rules:
- Only the two question types above are allowed.
- "correctAnswer" of a multiple-choice question must appear in "options" exactly once.
- Mix source-to-target and target-to-source questions.
- Use ONLY the provided words. Do not introduce new vocabulary.
"""
