"""Calendar arithmetic engines: conversion, moons, recurrence, age."""
