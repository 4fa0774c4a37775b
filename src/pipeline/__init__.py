"""
Feedback pipeline stages.

Each stage is a pure transformation over one request's rows:
- Date normalization
- Row extraction
- Time-window filtering
- Aggregation (summary stats + time series)
- Comment summarization (Gemini)
"""
