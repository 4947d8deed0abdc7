"""
Prompt/response pipeline for CSV question answering.

Per request:
  1. mode selection: single analysis vs multi-file comparison
  2. prompt building: size-bounded CSV payloads rendered into a template
  3. completion call: one request to the configured chat-completion API
  4. decomposition: narrative text + optional ```chart descriptor
"""
