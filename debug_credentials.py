"""
Debug Twitter API credentials.

Loads the configuration, reports which values are present (never the values
themselves) and checks them against the API.

Usage:
    python debug_credentials.py
"""

import sys

from config import settings
from services.twitter_service import TwitterService
from utils.exceptions import ConfigurationError, SocialMediaError

CREDENTIAL_LABELS = [
    ("api_key", "API Key"),
    ("api_secret", "API Secret"),
    ("access_token", "Access Token"),
    ("access_token_secret", "Access Token Secret"),
]


def debug_credentials() -> int:
    """
    Run the credential diagnostics.

    Returns:
        int: 0 if the credentials work, 1 otherwise.
    """
    print("🔍 Debugging Twitter API credentials...\n")

    print("1️⃣ Loading configuration...")
    try:
        credentials = settings.load_credentials()
    except ConfigurationError as e:
        print("❌ Configuration error:")
        print(f"   Error: {e}")
        print("\n🔧 Configuration Troubleshooting:")
        print("   1. Make sure your .env file exists")
        print("   2. Check that all required variables are set")
        print("   3. Verify there are no typos in variable names")
        return 1

    summary = settings.get_config_summary(credentials)["credentials"]
    print("✅ Configuration loaded successfully")
    for name, label in CREDENTIAL_LABELS:
        print(f"   - {label}: {'✅ Present' if summary[name] else '❌ Missing'}")
    print(f"   - Bearer Token: {'✅ Present' if summary['bearer_token'] else '❌ Optional - Missing'}\n")

    print("2️⃣ Testing credentials...")
    service = TwitterService(credentials)
    try:
        user = service.verify_credentials()
    except SocialMediaError as e:
        print("❌ Credential verification failed:")
        print(f"   Error: {e}\n")

        if e.status_code == 403:
            print("🔧 403 Error Troubleshooting:")
            print("   1. Check if your Twitter app has WRITE permissions")
            print("   2. Verify your Access Token and Secret are correct")
            print("   3. Make sure your app is not restricted")
            print("   4. Check if your Twitter account is verified")
        elif e.status_code == 401:
            print("🔧 401 Error Troubleshooting:")
            print("   1. Double-check your API Key and Secret")
            print("   2. Verify your Access Token and Secret")
            print("   3. Make sure there are no extra spaces in your .env file")
        return 1

    print("✅ Credentials verified successfully!")
    print(f"   - Username: @{user.data.username}")
    print(f"   - Display Name: {user.data.name}")
    print(f"   - User ID: {user.data.id}\n")
    print("✅ Authentication successful - ready to post tweets!\n")
    return 0


if __name__ == "__main__":
    sys.exit(debug_credentials())
