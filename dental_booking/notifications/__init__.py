"""Patient notifications: delivery gateway, message texts and dispatch"""
