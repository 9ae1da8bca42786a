"""
X Poster Application

This is the main entry point for the X Poster application.
Without a command it starts the interactive menu; each menu action is also
available as a subcommand for scripting.
"""

import sys
import argparse
import logging
from typing import List, Optional

from config import settings
from utils.logger import get_logger, setup_file_logging
from utils.exceptions import XPosterError, ConfigurationError, SocialMediaError
from utils.helpers import (
    validate_tweet_text, validate_image_path, split_thread_text, validate_thread,
    parse_schedule_time, validate_tweet_count
)
from services.bot import XBot
from cli.interactive import XPosterCLI, print_tweets
from cli import commands
from debug_credentials import debug_credentials

# Set up logging
logger = get_logger(__name__)


def parse_arguments(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(prog='x-poster', description='Post to X (Twitter) from the command line')
    parser.add_argument('--log-file', type=str, default=None, help='Log file path')
    parser.add_argument('--log-level', type=str, choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        default=settings.DEFAULT_LOG_LEVEL, help='Logging level')

    sub = parser.add_subparsers(dest='command')
    sub.add_parser('interactive', help='Interactive menu (default)')
    sub.add_parser('setup', help='Write API credentials to .env and verify them')
    sub.add_parser('status', help='Check the .env file and credentials')
    sub.add_parser('debug', help='Diagnose credential problems')

    p = sub.add_parser('tweet', help='Post a simple tweet')
    p.add_argument('text')

    p = sub.add_parser('image', help='Post a tweet with an image')
    p.add_argument('text')
    p.add_argument('path', help='Image file path or http(s) URL')

    p = sub.add_parser('thread', help='Post a thread')
    p.add_argument('texts', nargs='*', help='Thread tweets in order')
    p.add_argument('--file', type=argparse.FileType('r', encoding='utf-8'),
                   help='Read the thread from a file, one tweet per line')

    p = sub.add_parser('schedule', help='Post a tweet later; waits until it is posted')
    p.add_argument('text')
    p.add_argument('when', help='Schedule time (YYYY-MM-DD HH:MM)')

    sub.add_parser('tech', help='Post a random tech tweet')
    sub.add_parser('quote', help='Post a motivational quote')
    sub.add_parser('quick', help='Pick a canned tweet to post')

    p = sub.add_parser('daily', help='Post a daily progress update')
    p.add_argument('progress')

    p = sub.add_parser('recent', help='Show recent tweets')
    p.add_argument('-n', '--count', type=int, default=settings.DEFAULT_RECENT_TWEETS)

    return parser, parser.parse_args(argv)


def _usage_error(parser: argparse.ArgumentParser, message: Optional[str]) -> None:
    if message:
        parser.error(message)


def run_schedule(bot: XBot, text: str, when) -> int:
    """Schedule a tweet and keep the process alive until it fires."""
    outcome = {}

    def _record(post, error):
        outcome['error'] = error

    bot.on_scheduled_post(_record)
    post = bot.schedule_tweet(text, when)
    print(f"📅 Tweet scheduled for: {post.run_at:%c}. Press Ctrl+C to cancel.")

    try:
        bot.wait_for_scheduled()
    except KeyboardInterrupt:
        bot.cancel_scheduled(post.job_id)
        print("\nScheduled tweet cancelled.")
        return 1
    finally:
        bot.shutdown()

    error = outcome.get('error')
    if error is not None:
        print(f"❌ Error posting scheduled tweet: {error}")
        return 1
    print("⏰ Scheduled tweet posted successfully")
    return 0


def run_command(parser: argparse.ArgumentParser, args, bot: Optional[XBot] = None) -> int:
    """
    Dispatch a parsed command.

    Args:
        parser: The argument parser, used to report usage errors.
        args: Parsed arguments.
        bot: Bot to use; built from the environment if omitted.

    Returns:
        int: Process exit code.
    """
    command = args.command or 'interactive'

    # Commands that manage credentials themselves
    if command == 'setup':
        return commands.setup()
    if command == 'status':
        return commands.status()
    if command == 'debug':
        return debug_credentials()

    # Validate input before touching the network
    if command in ('tweet', 'image', 'schedule'):
        _usage_error(parser, validate_tweet_text(args.text))
    if command == 'image':
        _usage_error(parser, validate_image_path(args.path))
    if command == 'thread':
        if args.file:
            with args.file as thread_file:
                texts = split_thread_text(thread_file.read())
        else:
            texts = args.texts
        _usage_error(parser, validate_thread(texts))
    if command == 'recent':
        _usage_error(parser, validate_tweet_count(args.count))
    if command == 'daily' and not args.progress.strip():
        parser.error('Progress update cannot be empty!')
    when = None
    if command == 'schedule':
        try:
            when = parse_schedule_time(args.when)
        except ValueError as e:
            parser.error(str(e))

    bot = bot or XBot()

    if command == 'interactive':
        return XPosterCLI(bot).run()
    if command == 'quick':
        return commands.quick_tweet(bot)
    if command == 'schedule':
        return run_schedule(bot, args.text, when)

    if command == 'tweet':
        result = bot.tweet(args.text)
        print(f"✅ Tweet posted successfully! ID: {result.data['id']}")
    elif command == 'image':
        result = bot.tweet_with_image(args.text, args.path)
        print(f"✅ Tweet with image posted successfully! ID: {result.data['id']}")
    elif command == 'thread':
        results = bot.tweet_thread(texts)
        print(f"✅ Thread posted successfully! {len(results)} tweets posted.")
    elif command == 'tech':
        result = bot.post_random_tech_tweet()
        print(f"✅ Random tech tweet posted! ID: {result.data['id']}")
    elif command == 'quote':
        result = bot.post_motivational_quote()
        print(f"✅ Motivational quote posted! ID: {result.data['id']}")
    elif command == 'daily':
        result = bot.post_daily_update(args.progress.strip())
        print(f"✅ Daily update posted successfully! ID: {result.data['id']}")
    elif command == 'recent':
        print_tweets(bot.get_recent_tweets(args.count))

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application."""
    # Parse command line arguments
    parser, args = parse_arguments(argv)

    # Set up logging
    log_level = getattr(logging, args.log_level)
    setup_file_logging(args.log_file, log_level)

    logger.debug(f"Starting X Poster command: {args.command or 'interactive'}")

    try:
        exit_code = run_command(parser, args)
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        exit_code = 1
    except SocialMediaError as e:
        logger.error(f"X API error: {e}", exc_info=log_level <= logging.DEBUG)
        exit_code = 1
    except XPosterError as e:
        logger.error(f"X Poster error: {e}")
        exit_code = 1
    except KeyboardInterrupt:
        print("\n\n👋 X Poster CLI interrupted. Goodbye!\n")
        exit_code = 0
    except Exception as e:
        logger.error(f"Unhandled exception in X Poster: {e}", exc_info=True)
        exit_code = 2

    logger.debug(f"X Poster finished with exit code {exit_code}")
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
