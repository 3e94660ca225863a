'''
Created on Dec 12, 2022
'''
