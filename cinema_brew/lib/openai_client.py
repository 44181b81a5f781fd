# cinema_brew/lib/openai_client.py
from openai import OpenAI
from cinema_brew.config import config

# max_retries=0: retry policy for images lives in the storyboard fetcher,
# and content generation must fail fast on quota errors.
client = OpenAI(api_key=config.openai_api_key, max_retries=0)
