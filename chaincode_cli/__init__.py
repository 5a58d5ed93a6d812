"""Scaffold and upgrade chaincode projects."""
