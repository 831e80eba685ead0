"""
Interactive setup wizard for the heart-rate banner.

Walks through Fitbit's OAuth authorization-code flow once and saves the
resulting tokens to ~/.hrbanner/credentials.json with owner-only permissions
(0700 dir / 0600 file).

Before running, register a "Personal" app at https://dev.fitbit.com/apps with
callback URL http://localhost:8090 and put its client id and secret in .env:

    FITBIT_CLIENT_ID=...
    FITBIT_CLIENT_SECRET=...

Usage:
    python -m hrbanner setup
    python -m hrbanner.scripts.setup   (direct invocation)

Re-run if the refresh token is ever revoked.
"""
import sys

from hrbanner.config import get_settings
from hrbanner.fitbit.auth import FitbitAuth, code_from_redirect
from hrbanner.tz import TimezoneLookupError, lookup_full_tz


def run_setup() -> None:
    settings = get_settings()

    print("\n💓 Heart Rate Banner — Fitbit Setup\n")
    if not settings.fitbit_client_id or not settings.fitbit_client_secret:
        print("Error: FITBIT_CLIENT_ID and FITBIT_CLIENT_SECRET must be set in .env.")
        print("Create an app at https://dev.fitbit.com/apps first.")
        sys.exit(1)

    auth = FitbitAuth(
        client_id=settings.fitbit_client_id,
        client_secret=settings.fitbit_client_secret,
        redirect_uri=settings.fitbit_redirect_uri,
        credentials_dir=settings.credentials_dir,
    )
    print(f"Tokens will be stored in: {auth.credentials_file}\n")

    if auth.has_credentials():
        print("⚠️  Existing credentials were found.")
        overwrite = input("Overwrite them with a new authorization? [y/N] ").strip().lower()
        if overwrite != "y":
            print("Setup cancelled. Existing credentials unchanged.")
            sys.exit(0)

    print("1. Open this link and allow access to your heart rate data:\n")
    print(f"   {auth.authorize_url()}\n")
    print("2. Your browser will be redirected to a page that fails to load.")
    redirect = input("   Paste that page's full URL (or just the code): ").strip()
    if not redirect:
        print("Error: nothing pasted.")
        sys.exit(1)

    try:
        code = code_from_redirect(redirect)
        auth.exchange_code(code)
    except Exception as exc:
        print(f"\n❌ Authorization failed: {exc}")
        print("Authorization codes are single use; open the link again and retry.")
        sys.exit(1)

    try:
        zone = lookup_full_tz(settings.timezone_abbrev, settings.utc_offset_hours).full
    except TimezoneLookupError:
        zone = f"{settings.timezone_abbrev} (unknown abbreviation, shown as-is)"

    print(f"\n✅ Credentials saved to {auth.credentials_file}")
    print(f"   Banner timezone: {zone}, UTC{settings.utc_offset_hours:+d}")
    print("\nStart the server with:  python -m hrbanner")
    print(
        "Use the following README embed: "
        f"![Fitbit Heart Rate Chart](http://HOSTIP:{settings.port}/stats.svg)\n"
    )


if __name__ == "__main__":
    run_setup()
