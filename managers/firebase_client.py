import logging
import firebase_admin
from firebase_admin import credentials, firestore


class FirebaseClient:
    def __init__(self, credentials_input, project_id=None):
        """
        Connects the Firebase Admin SDK and opens the Firestore client.
        `credentials_input` is a service-account dict (from secrets) or a path
        to the service-account JSON file.
        """
        # The Admin SDK keeps one default app per process.
        if not firebase_admin._apps:
            cred = credentials.Certificate(credentials_input)
            app_options = {}
            if project_id:
                app_options['projectId'] = project_id
            firebase_admin.initialize_app(cred, app_options)
            logging.info("Firebase Admin app initialized.")

        self.db = firestore.client()
