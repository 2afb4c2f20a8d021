"""
AI Solution Generation
generation/

Steps:
1. Prompt Builder     — question + topic notes + part/slot + worked examples → prompt
2. Answer Client      — one Chat Completions call, no retries
3. Response Parser    — fence stripping, JSON validation, advisory markup check
4. Solution Generator — orchestrates 1-3 and writes answer/solution back
"""
