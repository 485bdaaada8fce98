"""
Firebase service for Firestore and Authentication operations
"""

from __future__ import annotations
import asyncio
import json
import logging
import os
from typing import Optional, Dict, Any, List, Union

import firebase_admin
from firebase_admin import credentials, firestore, auth as firebase_auth

from app.config import settings

logger = logging.getLogger(__name__)

Filters = Union[Dict[str, Any], List[tuple]]


class FirebaseService:
    """Service for Firebase operations"""

    _instance = None

    def __new__(cls):
        """Singleton pattern to ensure only one Firebase instance"""
        if cls._instance is None:
            cls._instance = super(FirebaseService, cls).__new__(cls)
            cls._instance._db = None
        return cls._instance

    @property
    def db(self):
        """Firestore client, created on first use"""
        if self._db is None:
            self._initialize_firebase()
            self._db = firestore.client()
        return self._db

    def _initialize_firebase(self):
        """Initialize Firebase Admin SDK with credentials"""
        try:
            # Check if already initialized
            firebase_admin.get_app()
            return
        except ValueError:
            pass

        try:
            if settings.DEV_MODE and settings.FIREBASE_EMULATOR_HOST:
                # Use emulator for development
                os.environ["FIRESTORE_EMULATOR_HOST"] = settings.FIREBASE_EMULATOR_HOST
                firebase_admin.initialize_app(
                    options={"projectId": settings.FIREBASE_PROJECT_ID or "demo-cyberlawyerhub"})
                logger.info(
                    f"Firebase initialized with emulator: {settings.FIREBASE_EMULATOR_HOST}")
                return

            if settings.FIREBASE_CREDENTIALS_JSON:
                cred = credentials.Certificate(
                    json.loads(settings.FIREBASE_CREDENTIALS_JSON))
                logger.info(
                    "Firebase initialized with credentials from FIREBASE_CREDENTIALS_JSON")
            else:
                # Fallback to file path
                cred = credentials.Certificate(
                    settings.FIREBASE_CREDENTIALS_PATH)
                logger.info(
                    f"Firebase initialized with credentials from {settings.FIREBASE_CREDENTIALS_PATH}")

            firebase_admin.initialize_app(cred)
        except Exception as e:
            logger.error(f"Firebase Admin SDK initialization failed: {e}")
            raise

    # ============================================
    # AUTHENTICATION
    # ============================================
    async def verify_id_token(self, id_token: str) -> Dict[str, Any]:
        """
        Verify a Firebase ID token and return its decoded claims

        Raises:
            ValueError: If the token is invalid, expired or revoked
        """
        if self._db is None:
            self._initialize_firebase()
        try:
            return await asyncio.to_thread(firebase_auth.verify_id_token, id_token)
        except (firebase_auth.InvalidIdTokenError,
                firebase_auth.ExpiredIdTokenError,
                firebase_auth.RevokedIdTokenError) as e:
            raise ValueError(str(e)) from e

    # ============================================
    # DOCUMENT OPERATIONS
    # ============================================
    async def get_document(self, path: str) -> Optional[Dict[str, Any]]:
        """Fetch a document by "collection/doc_id" path, None when missing"""
        snapshot = await asyncio.to_thread(self.db.document(path).get)
        if not snapshot.exists:
            return None
        return snapshot.to_dict()

    async def set_document(self, path: str, data: Dict[str, Any], merge: bool = False):
        await asyncio.to_thread(self.db.document(path).set, data, merge=merge)

    async def update_document(self, path: str, data: Dict[str, Any]):
        await asyncio.to_thread(self.db.document(path).update, data)

    async def delete_document(self, path: str):
        await asyncio.to_thread(self.db.document(path).delete)

    # ============================================
    # GENERIC QUERY OPERATIONS
    # ============================================
    async def query_collection(
        self,
        collection_name: str,
        filters: Optional[Filters] = None,
        order_by: Optional[str] = None,
        direction: str = firestore.Query.ASCENDING,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> tuple[List[tuple[str, Dict[str, Any]]], int]:
        """
        Queries a Firestore collection with filters, ordering, and pagination.

        Args:
            collection_name: The name of the Firestore collection.
            filters: Either a dict of {field: value} equality filters or a list
                     of (field, op, value) tuples.
            order_by: The field to order the results by.
            direction: firestore.Query.ASCENDING or firestore.Query.DESCENDING.
            limit: The maximum number of documents to return.
            offset: The number of documents to skip.

        Returns:
            A tuple of ([(document_id, document_data), ...], count of returned documents).
        """
        query = self.db.collection(collection_name)

        if filters:
            if isinstance(filters, dict):
                filters = [(k, "==", v) for k, v in filters.items()]

            for f in filters:
                if len(f) != 3:
                    raise ValueError(
                        f"Invalid filter format: {f}. Expected (field, op, value)")
                query = query.where(f[0], f[1], f[2])

        if order_by:
            query = query.order_by(order_by, direction=direction)

        if offset:
            query = query.offset(offset)

        if limit:
            query = query.limit(limit)

        def _get_stream_data(q):
            return [(doc.id, doc.to_dict()) for doc in q.stream()]

        docs = await asyncio.to_thread(_get_stream_data, query)
        return docs, len(docs)


# Global Firebase service instance
firebase_service = FirebaseService()
