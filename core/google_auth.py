import os
import pickle
import logging
from google_auth_oauthlib.flow import InstalledAppFlow
from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import Request
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

logger = logging.getLogger(__name__)

# Scopes needed to access user info
SCOPES = ['https://www.googleapis.com/auth/userinfo.email',
          'https://www.googleapis.com/auth/userinfo.profile',
          'openid']

def _load_credentials(settings, force_new_login=False):
    token_file = settings.google_token_file

    # If force_new_login, delete existing token to show account picker
    if force_new_login and os.path.exists(token_file):
        os.remove(token_file)
        logger.info("Forcing new Google login")

    creds = None
    if os.path.exists(token_file):
        with open(token_file, 'rb') as token:
            creds = pickle.load(token)

    if creds and creds.valid:
        return creds

    if creds and creds.expired and creds.refresh_token:
        creds.refresh(Request())
    else:
        if not os.path.exists(settings.google_client_secrets_file):
            logger.error("Google client secrets file not found: %s", settings.google_client_secrets_file)
            return None
        flow = InstalledAppFlow.from_client_secrets_file(settings.google_client_secrets_file, SCOPES)
        creds = flow.run_local_server(
            port=0,
            prompt='select_account',  # Force Google account picker
            authorization_prompt_message='Please select your Google account in the browser...'
        )

    # Save credentials for next time
    with open(token_file, 'wb') as token:
        pickle.dump(creds, token)
    return creds

def get_google_user_info(settings, force_new_login=False):
    """
    Authenticate with Google and return user info
    Args:
        settings: Settings with the client secrets and token file paths
        force_new_login: If True, always show account selection
    Returns: dict with 'email', 'name', 'picture', 'google_id' or None if failed
    """
    try:
        creds = _load_credentials(settings, force_new_login)
    except (GoogleAuthError, OSError, ValueError) as e:
        logger.error("OAuth error: %s", e)
        return None
    if creds is None:
        return None

    try:
        service = build('people', 'v1', credentials=creds)
        results = service.people().get(
            resourceName='people/me',
            personFields='emailAddresses,names,photos'
        ).execute()
    except (HttpError, GoogleAuthError) as e:
        logger.error("Error getting Google user info: %s", e)
        return None

    email = results['emailAddresses'][0]['value'] if results.get('emailAddresses') else None
    if not email:
        return None
    return {
        'email': email,
        'name': results['names'][0]['displayName'] if results.get('names') else None,
        'picture': results['photos'][0]['url'] if results.get('photos') else None,
        'google_id': results.get('resourceName', '').replace('people/', '') or None,
    }

def revoke_google_auth(settings):
    """Logout - delete saved token"""
    if os.path.exists(settings.google_token_file):
        os.remove(settings.google_token_file)
        logger.info("Google authentication revoked")
