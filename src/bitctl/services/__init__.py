"""Service layer: conversion operations and the interactive session."""
