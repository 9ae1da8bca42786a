"""
Interactive X Poster CLI

Menu-driven loop over the XBot verbs. Errors from the bot are shown to the
user and the loop continues.
"""

from utils.exceptions import XPosterError
from utils.helpers import (
    validate_tweet_text, validate_image_path, split_thread_text, validate_thread,
    parse_schedule_time, validate_tweet_count
)
from utils.logger import get_logger
from services.bot import XBot
from config import settings
from cli.prompts import ask, ask_multiline, ask_int, confirm, choose

logger = get_logger(__name__)

HEADER = r"""
__  __  ____           _
\ \/ / |  _ \ ___  ___| |_ ___ _ __
 \  /  | |_) / _ \/ __| __/ _ \ '__|
 /  \  |  __/ (_) \__ \ ||  __/ |
/_/\_\ |_|   \___/|___/\__\___|_|
"""

MENU = [
    ("📝 Post a simple tweet", "simple_tweet"),
    ("🖼️  Post tweet with image", "tweet_with_image"),
    ("🧵 Post a thread", "post_thread"),
    ("⏰ Schedule a tweet", "schedule_tweet"),
    ("🚀 Post random tech tweet", "random_tech"),
    ("💪 Post motivational quote", "motivational_quote"),
    ("📈 Post daily progress update", "daily_update"),
    ("📖 View recent tweets", "view_recent"),
    ("💬 Custom message", "custom_message"),
    ("❌ Exit", "exit"),
]

GOODBYE = "\n👋 Thanks for using X Poster CLI! Goodbye!\n"


def _validate_schedule_input(value: str):
    try:
        parse_schedule_time(value)
    except ValueError as e:
        return str(e)
    return None


def _validate_custom_message(value: str):
    if not value.strip():
        return 'Message cannot be empty!'
    if len(value) > settings.TWITTER_CHARACTER_LIMIT:
        return f'Message is too long! Maximum {settings.TWITTER_CHARACTER_LIMIT} characters.'
    return None


class XPosterCLI:
    """Interactive menu for posting to X."""

    def __init__(self, bot: XBot):
        self.bot = bot
        self.handlers = {
            "simple_tweet": self.handle_simple_tweet,
            "tweet_with_image": self.handle_tweet_with_image,
            "post_thread": self.handle_post_thread,
            "schedule_tweet": self.handle_schedule_tweet,
            "random_tech": self.handle_random_tech,
            "motivational_quote": self.handle_motivational_quote,
            "daily_update": self.handle_daily_update,
            "view_recent": self.handle_view_recent,
            "custom_message": self.handle_custom_message,
        }
        self.bot.on_scheduled_post(report_scheduled_post)

    def display_header(self) -> None:
        print(HEADER)
        print("Interactive CLI for posting to X (Twitter)\n")

    def handle_simple_tweet(self) -> None:
        text = ask("Enter your tweet text:", validate_tweet_text)
        print("📤 Posting tweet...")
        result = self.bot.tweet(text)
        print(f"✅ Tweet posted successfully! ID: {result.data['id']}")

    def handle_tweet_with_image(self) -> None:
        text = ask("Enter your tweet text:", validate_tweet_text)
        image_path = ask("Enter the path to your image:", validate_image_path)
        print("📤 Posting tweet with image...")
        result = self.bot.tweet_with_image(text, image_path)
        print(f"✅ Tweet with image posted successfully! ID: {result.data['id']}")

    def handle_post_thread(self) -> None:
        raw = ask_multiline("Enter your thread tweets (one per line):",
                            lambda value: validate_thread(split_thread_text(value)))
        tweets = split_thread_text(raw)
        print(f"📤 Posting thread with {len(tweets)} tweets...")
        results = self.bot.tweet_thread(tweets)
        print(f"✅ Thread posted successfully! {len(results)} tweets posted.")

    def handle_schedule_tweet(self) -> None:
        text = ask("Enter your tweet text:", validate_tweet_text)
        raw_time = ask("Enter schedule time (YYYY-MM-DD HH:MM):", _validate_schedule_input)
        when = parse_schedule_time(raw_time)
        print(f"⏰ Scheduling tweet for {when:%c}...")
        post = self.bot.schedule_tweet(text, when)
        print(f"✅ Tweet scheduled successfully! Job: {post.job_id}")
        print("   Keep this program running until it is posted.")

    def handle_random_tech(self) -> None:
        print("📤 Posting random tech tweet...")
        result = self.bot.post_random_tech_tweet()
        print(f"✅ Random tech tweet posted! ID: {result.data['id']}")

    def handle_motivational_quote(self) -> None:
        print("📤 Posting motivational quote...")
        result = self.bot.post_motivational_quote()
        print(f"✅ Motivational quote posted! ID: {result.data['id']}")

    def handle_daily_update(self) -> None:
        progress = ask_multiline(
            "Enter your daily progress update:",
            lambda value: None if value.strip() else 'Progress update cannot be empty!'
        )
        print("📤 Posting daily update...")
        result = self.bot.post_daily_update(progress.strip())
        print(f"✅ Daily update posted successfully! ID: {result.data['id']}")

    def handle_view_recent(self) -> None:
        count = ask_int("How many recent tweets to fetch?", settings.DEFAULT_RECENT_TWEETS,
                        validate_tweet_count)
        print("📖 Fetching recent tweets...")
        tweets = self.bot.get_recent_tweets(count)
        print_tweets(tweets)

    def handle_custom_message(self) -> None:
        message = ask_multiline("Enter your custom message:", _validate_custom_message)
        print("📤 Posting custom message...")
        result = self.bot.tweet(message.strip())
        print(f"✅ Custom message posted successfully! ID: {result.data['id']}")

    def run_action(self, action: str) -> None:
        """Run one menu action, reporting bot errors instead of raising them."""
        try:
            self.handlers[action]()
        except XPosterError as e:
            logger.debug(f"Action {action} failed: {e!r}")
            print(f"❌ Error: {e}")

    def run(self) -> int:
        """
        Run the menu loop until the user exits.

        Returns:
            int: Process exit code.
        """
        try:
            while True:
                self.display_header()
                action = choose("What would you like to do?", MENU)

                if action == "exit":
                    print(GOODBYE)
                    break

                self.run_action(action)

                if not confirm("Do you want to perform another action?", default=True):
                    print(GOODBYE)
                    break
        except (KeyboardInterrupt, EOFError):
            print("\n\n👋 X Poster CLI interrupted. Goodbye!\n")

        pending = self.bot.scheduled_posts()
        if pending:
            print(f"⏳ Waiting for {len(pending)} scheduled tweet(s). Press Ctrl+C to cancel them.")
            try:
                self.bot.wait_for_scheduled()
            except KeyboardInterrupt:
                print("\nScheduled tweets cancelled.")

        self.bot.shutdown()
        return 0


def report_scheduled_post(post, error) -> None:
    """Print the outcome of a scheduled tweet when it fires."""
    if error is None:
        print(f"\n⏰ Scheduled tweet posted successfully ({post.job_id})")
    else:
        print(f"\n❌ Error posting scheduled tweet ({post.job_id}): {error}")


def print_tweets(tweets) -> None:
    """Render a timeline response."""
    data = tweets.data or []
    if not data:
        print("No recent tweets found.")
        return

    print(f"\n📝 Your last {len(data)} tweets:\n")
    for index, tweet in enumerate(data, start=1):
        print(f"{index}. {tweet.text}")
        created = f"{tweet.created_at:%c}" if tweet.created_at else "unknown"
        metrics = tweet.public_metrics or {}
        print(f"   ID: {tweet.id} | Created: {created} | "
              f"❤️ {metrics.get('like_count', 0)} 🔁 {metrics.get('retweet_count', 0)}\n")
